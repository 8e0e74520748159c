# engine_cache/cli/console_output.py
"""
Prints the registered engines as a table on stdout.
"""
from rich.console import Console as RichConsole
from rich.table import Table
import structlog

log = structlog.get_logger(__name__)

def print_engine_table(engines, console: RichConsole = None):
    console = console or RichConsole()
    cache = engines.get()
    log.debug("console_engine_table_requested", count=len(cache))

    table = Table(title="Registered engines")
    table.add_column("Extension", style="cyan")
    table.add_column("Engine")
    table.add_column("render_file")
    table.add_column("Options")
    for ext in sorted(cache):
        descriptor = cache[ext]
        table.add_row(ext, descriptor.name, "yes" if descriptor.render_file else "no",
                      ", ".join(sorted(descriptor.options)) or "-")
    if not cache:
        console.print("(no engines registered)")
        return
    console.print(table)
