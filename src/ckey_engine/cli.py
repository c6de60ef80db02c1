"""Typer CLI for CKey-Engine."""

import typer
from rich.console import Console

app = typer.Typer(name="ckey", help="CKey-Engine: name-bound license key generator")
console = Console()


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(8080, help="Bind port"),
):
    """Start the CKey-Engine API server."""
    import uvicorn
    from ckey_engine.app import create_app

    console.print(f"[bold green]Starting CKey-Engine on {host}:{port}[/bold green]")
    uvicorn.run(create_app(), host=host, port=port)


@app.command()
def generate(
    name: str = typer.Argument(..., help="Licensee name"),
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of keys"),
):
    """Generate license keys for a name (offline)."""
    from ckey_engine.keygen.generator import generate_license_key

    for _ in range(count):
        console.print(f"[bold]{generate_license_key(name)}[/bold]")


@app.command()
def verify(
    name: str = typer.Argument(..., help="Licensee name"),
    key: str = typer.Argument(..., help="License key to verify"),
):
    """Verify a license key against a name (offline)."""
    from ckey_engine.keygen.validator import validate_key

    result = validate_key(name, key)

    if result.valid:
        console.print(f"[bold green]VALID[/bold green] - {result.message}")
    else:
        console.print(f"[bold red]INVALID[/bold red] - {result.message}")
        raise typer.Exit(1)


@app.command()
def health(
    url: str = typer.Option("http://localhost:8080", help="Server URL"),
):
    """Check CKey-Engine server health."""
    from ckey_engine.client import KeyClient

    with KeyClient(server_url=url, timeout=5, max_retries=1) as client:
        data = client.health()

    if "error" in data:
        console.print(f"[bold red]Error:[/bold red] {data['error']}")
        raise typer.Exit(1)
    console.print(f"[bold green]{data['status']}[/bold green] - v{data['version']}")


if __name__ == "__main__":
    app()
