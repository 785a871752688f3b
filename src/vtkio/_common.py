from rich.console import Console


def format_ints(values):
    return " ".join(f"{v:d}" for v in values)


def format_floats(values):
    return " ".join(f"{v:f}" for v in values)


def info(string, highlight: bool = True) -> None:
    Console(stderr=True).print(f"[bold]Info:[/bold] {string}", highlight=highlight)


def warn(string, highlight: bool = True) -> None:
    Console(stderr=True).print(
        f"[yellow][bold]Warning:[/bold] {string}[/yellow]", highlight=highlight
    )

