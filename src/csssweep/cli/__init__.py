from csssweep.cli.main import cli

__all__ = ["cli"]
