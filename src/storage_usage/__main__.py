"""Application entry point for storage-usage."""

from __future__ import annotations

from storage_usage.app.cli import cli

__all__ = ["main"]


def main() -> None:
    """Main entry point for the storage-usage command."""
    cli(prog_name="storage-usage")


if __name__ == "__main__":
    main()
