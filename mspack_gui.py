#!/usr/bin/env python3
"""Multisample Packer - GUI Entry Point.

Usage: python mspack_gui.py

Requires: flet[all]>=0.80.0
"""

import flet as ft

from gui.app import MspackApp


def main(page: ft.Page):
    """Main entry point for Flet application."""
    MspackApp(page)


def run():
    """Entry point for the mspack-gui console script."""
    ft.run(main)


if __name__ == "__main__":
    run()
