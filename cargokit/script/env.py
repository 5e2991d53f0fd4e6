"""
Environment Cargo provides to build scripts.

See https://doc.rust-lang.org/cargo/reference/environment-variables.html
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set

from cargokit.core import env


def _cfg_key(name: str) -> str:
    return name.replace("-", "_").upper()


@dataclass
class BuildScriptEnv:
    """
    Variables Cargo sets when running a build script.

    Attributes:
        cargo: Path to the cargo binary performing the build
        cargo_manifest_dir: Directory of the package being built (also the cwd)
        cargo_manifest_links: The manifest ``links`` value, if any
        cargo_cfg_unix: Target is unix-like
        cargo_cfg_windows: Target is windows-like
        cargo_cfg_target_family: windows, unix, ...
        cargo_cfg_target_os: windows, macos, linux, android, ...
        cargo_cfg_target_arch: x86_64, aarch64, ...
        cargo_cfg_target_vendor: apple, pc, unknown, ...
        cargo_cfg_target_env: gnu, msvc, musl, or "" when blank
        cargo_cfg_target_pointer_width: 16, 32, 64
        cargo_cfg_target_endian: little or big
        cargo_cfg_target_features: Enabled CPU target features
        out_dir: Directory all build script output goes to
        target: Target triple being compiled for
        host: Host triple of the compiler
        num_jobs: Top-level parallelism
        opt_level: Optimization level of the current profile
        profile: "release", "debug" or a custom profile
        rustc: Compiler cargo resolved to use
        rustdoc: Documentation generator, if set
        rustc_linker: Linker for the current target, if specified
    """

    cargo: Path
    cargo_manifest_dir: Path
    cargo_cfg_target_family: str
    cargo_cfg_target_os: str
    cargo_cfg_target_arch: str
    cargo_cfg_target_vendor: str
    cargo_cfg_target_pointer_width: str
    cargo_cfg_target_endian: str
    out_dir: Path
    target: str
    host: str
    num_jobs: str
    opt_level: str
    profile: str
    rustc: Path
    cargo_manifest_links: Optional[str] = None
    cargo_cfg_unix: bool = False
    cargo_cfg_windows: bool = False
    cargo_cfg_target_env: str = ""
    cargo_cfg_target_features: Set[str] = field(default_factory=set)
    rustdoc: Optional[Path] = None
    rustc_linker: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "BuildScriptEnv":
        """
        Read the build script environment.

        Raises:
            EnvVarError: If a variable Cargo always sets is missing or not unicode
        """
        return cls(
            cargo=env.var_path("CARGO"),
            cargo_manifest_dir=env.var_path("CARGO_MANIFEST_DIR"),
            cargo_manifest_links=env.opt_os("CARGO_MANIFEST_LINKS"),
            cargo_cfg_unix=env.has_var("CARGO_CFG_UNIX"),
            cargo_cfg_windows=env.has_var("CARGO_CFG_WINDOWS"),
            cargo_cfg_target_family=env.var_str("CARGO_CFG_TARGET_FAMILY"),
            cargo_cfg_target_os=env.var_str("CARGO_CFG_TARGET_OS"),
            cargo_cfg_target_arch=env.var_str("CARGO_CFG_TARGET_ARCH"),
            cargo_cfg_target_vendor=env.var_str("CARGO_CFG_TARGET_VENDOR"),
            cargo_cfg_target_env=(
                env.var_str("CARGO_CFG_TARGET_ENV")
                if env.has_var("CARGO_CFG_TARGET_ENV")
                else ""
            ),
            cargo_cfg_target_pointer_width=env.var_str("CARGO_CFG_TARGET_POINTER_WIDTH"),
            cargo_cfg_target_endian=env.var_str("CARGO_CFG_TARGET_ENDIAN"),
            cargo_cfg_target_features=set(
                f for f in env.var_str("CARGO_CFG_TARGET_FEATURE").split(",") if f
            ),
            out_dir=env.var_path("OUT_DIR"),
            target=env.var_str("TARGET"),
            host=env.var_str("HOST"),
            num_jobs=env.var_str("NUM_JOBS"),
            opt_level=env.var_str("OPT_LEVEL"),
            profile=env.var_str("PROFILE"),
            rustc=env.var_path("RUSTC"),
            rustdoc=env.opt_path("RUSTDOC"),
            rustc_linker=env.opt_path("RUSTC_LINKER"),
        )

    def cargo_feature(self, name: str) -> bool:
        """Is feature ``name`` enabled for the package being built?"""
        return env.has_var(f"CARGO_FEATURE_{_cfg_key(name)}")

    def cargo_cfg(self, name: str) -> bool:
        return env.has_var(f"CARGO_CFG_{_cfg_key(name)}")

    def cargo_cfg_str(self, name: str) -> Optional[str]:
        return env.opt_str(f"CARGO_CFG_{_cfg_key(name)}")

    def cargo_cfg_list(self, name: str) -> List[str]:
        value = self.cargo_cfg_str(name)
        return value.split(",") if value is not None else []

    def dep(self, name: str, key: str) -> Optional[str]:
        """Metadata exported by a ``links`` dependency (``DEP_<NAME>_<KEY>``)."""
        return env.opt_str(f"DEP_{name}_{key}")
