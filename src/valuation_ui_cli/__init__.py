"""Command-line interface: typer commands, rich tables and plotly charts."""
