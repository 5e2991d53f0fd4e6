"""
CargoKit: Cargo workspace resolution and Rust tool helpers.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cargokit")
except PackageNotFoundError:
    __version__ = "0.1.0"
