#!/usr/bin/env python3
"""Convenience entry point for the `xml_settings` command line interface."""

from xml_settings.cli import main as _main


if __name__ == "__main__":
    raise SystemExit(_main())
