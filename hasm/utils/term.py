"""Status lines for the hasmc driver, plain in minimal mode."""
import os

from rich.console import Console
from rich.markup import escape

console = Console()
err_console = Console(stderr=True)

MINIMAL = False

# kind -> (minimal tag, rich tag, goes to stderr)
STYLES = {
    'error': ("[ERROR]", "[red]Error:[/red]", True),
    'warning': ("[WARN]", "[#9b59b6]Warning:[/#9b59b6]", True),
    'success': ("[OK]", "[green]Success:[/green]", False),
}


def is_minimal() -> bool:
    env = os.environ.get('HASM_MINIMAL_UI')
    if env is not None:
        return env.strip().lower() in ('1', 'true', 'yes', 'on')
    return MINIMAL


def _report(kind: str, message: str):
    plain, rich_tag, to_stderr = STYLES[kind]
    target = err_console if to_stderr else console
    if is_minimal():
        target.print(f"{plain} {message}", markup=False, highlight=False)
    else:
        target.print(f"{rich_tag} {escape(message)}")


def print_stage(step: int, total: int, message: str):
    """Print a staged progress line, e.g. [1/2] Translating prog.hasm"""
    if is_minimal():
        console.print(f"[{step}/{total}] {message}", markup=False, highlight=False)
    else:
        console.print(f"[cyan]●[/cyan] [bold]{step}/{total}[/bold] {escape(message)}")


def print_error(message: str):
    _report('error', message)


def print_warning(message: str):
    _report('warning', message)


def print_success(message: str):
    _report('success', message)
