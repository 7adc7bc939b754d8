"""
Command line interface - Typer application.
"""
