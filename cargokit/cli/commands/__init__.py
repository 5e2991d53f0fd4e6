"""CLI subcommand implementations; each module exposes run(args) -> int."""
