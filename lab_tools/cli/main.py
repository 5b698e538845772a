"""
CLI interface for Lab Tools.

Provides the three menu-driven tools (log analyzer, inventory manager,
matrix calculator) plus non-interactive log commands for scripting.
"""

import logging
import sys
from typing import Callable, List, Optional, Sequence, Tuple

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lab_tools.cli.prompts import (
    FieldParseError,
    parse_int,
    parse_name,
    parse_price,
    parse_time,
    read_field,
)
from lab_tools.config.loader import AppConfig, load_config
from lab_tools.core.log_analyzer import (
    InputError,
    LevelCounts,
    classify_and_count,
    search_by_time_range,
)
from lab_tools.core.matrix import (
    DimensionMismatchError,
    Matrix,
    add,
    multiply,
    transpose,
)
from lab_tools.storage.log_file import LogFileError, ensure_log_file, read_log_lines
from lab_tools.storage.models import InventoryRecord
from lab_tools.storage.repository import (
    InventoryError,
    InventoryRepository,
    NegativeStockError,
    RecordNotFoundError,
)

app = typer.Typer()
console = Console()

logger = logging.getLogger(__name__)

EXIT_CODE_OK = 0
EXIT_CODE_FAIL = 1

MenuAction = Callable[[], None]


def _configure_logging(verbose: bool) -> None:
    """Send diagnostics to stderr so they never mix with tool output."""
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _get_config(ctx: typer.Context) -> AppConfig:
    return ctx.obj if isinstance(ctx.obj, AppConfig) else AppConfig()


def _resolve_log_file(ctx: typer.Context, log_file: Optional[str]) -> str:
    return log_file or _get_config(ctx).log_analyzer.log_file


def _error(message: str) -> None:
    console.print(f"\n[red]Error:[/] {escape(message)}", highlight=False, soft_wrap=True)


def _run_menu(title: str, actions: Sequence[Tuple[str, MenuAction]], farewell: str) -> None:
    """Show a numbered menu until the user picks exit or input ends.

    The exit option is always numbered after the last action.
    """
    exit_choice = len(actions) + 1
    while True:
        console.print(f"\n[bold]--- {title} ---[/bold]")
        for number, (label, _) in enumerate(actions, start=1):
            console.print(f"{number}. {label}", highlight=False)
        console.print(f"{exit_choice}. Exit", highlight=False)
        console.print("-" * (len(title) + 8))

        try:
            raw = console.input("Enter your choice: ")
            try:
                choice = parse_int(raw, "choice", 1, exit_choice)
            except FieldParseError:
                console.print("\nInvalid option. Please try again.")
                continue

            if choice == exit_choice:
                console.print(f"\n{farewell}")
                return
            actions[choice - 1][1]()
        except EOFError:
            logger.debug("Input closed, leaving %s", title)
            console.print()
            return


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        envvar="LAB_TOOLS_CONFIG",
        help="Path to a YAML configuration file"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Write debug logging to stderr"
    )
):
    """Lab Tools CLI."""
    _configure_logging(verbose)
    try:
        ctx.obj = load_config(config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading configuration:[/] {escape(str(e))}", soft_wrap=True)
        sys.exit(EXIT_CODE_FAIL)

    if ctx.invoked_subcommand is None:
        console.print("Lab Tools - Use --help to see available commands")


# ---------------------------------------------------------------------------
# Log analyzer
# ---------------------------------------------------------------------------

LOG_FILE_OPTION = typer.Option(
    None,
    "--log-file",
    "-l",
    help="Log file to analyze (defaults to the configured log file)"
)


def _bootstrap_log_file(path: str) -> None:
    """Create the sample log if needed; exit with failure if impossible."""
    try:
        created = ensure_log_file(path)
    except LogFileError as e:
        console.print(f"[red]Could not create sample log file:[/] {escape(str(e))}", soft_wrap=True)
        sys.exit(EXIT_CODE_FAIL)
    if created:
        console.print(f"Log file '{escape(path)}' not found. Created a sample log file.", soft_wrap=True)


def _display_level_counts(counts: LevelCounts) -> None:
    console.print("\n[bold]--- Log Level Analysis Summary ---[/bold]")
    console.print(f"Total lines processed: {counts.total}", highlight=False)
    console.print(f"Error count:     {counts.error_count}", highlight=False)
    console.print(f"Warning count:   {counts.warning_count}", highlight=False)
    console.print(f"Info count:      {counts.info_count}", highlight=False)
    console.print(f"Untagged lines:  {counts.unknown_count}", highlight=False)
    console.print("-" * 34)


def _display_search_results(lines: List[str], start: str, end: str) -> None:
    console.print(
        f"\n[bold]--- Logs between {escape(start)} and {escape(end)} ---[/bold]",
        highlight=False, soft_wrap=True
    )
    for line in lines:
        console.print(line, markup=False, emoji=False, highlight=False, soft_wrap=True)
    if not lines:
        console.print("No log entries found in the specified time range.")
    console.print("-" * 39)


def _count_levels(path: str) -> bool:
    try:
        counts = classify_and_count(read_log_lines(path))
    except LogFileError as e:
        _error(str(e))
        return False
    _display_level_counts(counts)
    return True


def _search_logs(path: str, start: str, end: str) -> bool:
    try:
        matches = search_by_time_range(read_log_lines(path), start, end)
    except InputError as e:
        _error(f"{e}. Please use HH:MM:SS and ensure the start time is not after the end time.")
        return False
    except LogFileError as e:
        _error(str(e))
        return False
    _display_search_results(matches, start, end)
    return True


@app.command()
def init(ctx: typer.Context, log_file: Optional[str] = LOG_FILE_OPTION):
    """Create the sample log file if it does not exist."""
    path = _resolve_log_file(ctx, log_file)
    _bootstrap_log_file(path)
    console.print(f"[green]✓[/] Log file ready: {escape(path)}", soft_wrap=True)
    sys.exit(EXIT_CODE_OK)


@app.command()
def count(ctx: typer.Context, log_file: Optional[str] = LOG_FILE_OPTION):
    """Count ERROR, WARNING and INFO lines in the log file."""
    path = _resolve_log_file(ctx, log_file)
    sys.exit(EXIT_CODE_OK if _count_levels(path) else EXIT_CODE_FAIL)


@app.command()
def search(
    ctx: typer.Context,
    start: str = typer.Argument(..., help="Start time, HH:MM:SS (inclusive)"),
    end: str = typer.Argument(..., help="End time, HH:MM:SS (inclusive)"),
    log_file: Optional[str] = LOG_FILE_OPTION
):
    """Print log lines whose timestamp falls within a time range."""
    path = _resolve_log_file(ctx, log_file)
    sys.exit(EXIT_CODE_OK if _search_logs(path, start, end) else EXIT_CODE_FAIL)


@app.command()
def logs(ctx: typer.Context, log_file: Optional[str] = LOG_FILE_OPTION):
    """Interactive log analyzer menu."""
    path = _resolve_log_file(ctx, log_file)
    _bootstrap_log_file(path)

    def search_action() -> None:
        start = read_field(console, "\nEnter start time (HH:MM:SS): ",
                           lambda raw: parse_time(raw, "start time"))
        end = read_field(console, "Enter end time (HH:MM:SS): ",
                         lambda raw: parse_time(raw, "end time"))
        _search_logs(path, start, end)

    _run_menu(
        "Log Analyzer Menu",
        [
            ("Count Log Levels (ERROR, WARNING, INFO)", lambda: _count_levels(path)),
            ("Search Logs by Time Range", search_action),
        ],
        "Exiting log analyzer. Goodbye!",
    )
    sys.exit(EXIT_CODE_OK)


# ---------------------------------------------------------------------------
# Inventory manager
# ---------------------------------------------------------------------------

def _format_currency(amount: float) -> str:
    """Format currency with proper symbols and formatting."""
    return f"${amount:,.2f}"


def _display_record(record: InventoryRecord) -> None:
    console.print("\n[bold]--- Product Found ---[/bold]")
    console.print(f"ID:       {record.id}", highlight=False)
    console.print(f"Name:     {escape(record.name)}", highlight=False)
    console.print(f"Quantity: {record.quantity}", highlight=False)
    console.print(f"Price:    {_format_currency(record.price)}", highlight=False)
    console.print("-" * 21)


def _display_inventory(records: List[InventoryRecord]) -> None:
    if not records:
        console.print("\nThe inventory is currently empty.")
        return

    table = Table(title="Current Inventory")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Quantity", justify="right")
    table.add_column("Price", justify="right")
    for record in records:
        table.add_row(
            str(record.id),
            escape(record.name),
            str(record.quantity),
            _format_currency(record.price),
        )
    console.print()
    console.print(table)


def _read_product_id(prompt: str) -> int:
    return read_field(console, prompt, lambda raw: parse_int(raw, "product ID"))


class InventorySession:
    """Menu actions bound to one repository for the life of a session."""

    def __init__(self, repository: InventoryRepository, max_name_length: int):
        self.repository = repository
        self.max_name_length = max_name_length

    def add_product(self) -> None:
        if self.repository.is_full:
            _error(f"Inventory is full. Cannot add more than {self.repository.capacity} products.")
            return

        record_id = _read_product_id("\nEnter new product ID: ")
        try:
            self.repository.find_by_id(record_id)
        except RecordNotFoundError:
            pass
        else:
            _error(f"A product with ID {record_id} already exists.")
            return

        name = read_field(console, "Enter product name: ",
                          lambda raw: parse_name(raw, self.max_name_length))
        quantity = read_field(console, "Enter product quantity: ",
                              lambda raw: parse_int(raw, "quantity", minimum=0))
        price = read_field(console, "Enter product price: ", parse_price)

        record = InventoryRecord(
            id=record_id,
            name=name,
            quantity=quantity,
            price=price,
            max_name_length=self.max_name_length
        )
        try:
            self.repository.add_product(record)
        except InventoryError as e:
            _error(str(e))
            return
        console.print("\n[green]Product added successfully![/]")

    def search_product(self) -> None:
        record_id = _read_product_id("\nEnter the product ID to search for: ")
        try:
            record = self.repository.find_by_id(record_id)
        except RecordNotFoundError:
            console.print(f"\nProduct with ID {record_id} not found in the inventory.")
            return
        _display_record(record)

    def list_products(self) -> None:
        _display_inventory(self.repository.list_all())

    def update_stock(self) -> None:
        record_id = _read_product_id("\nEnter the product ID to update stock: ")
        try:
            record = self.repository.find_by_id(record_id)
        except RecordNotFoundError:
            console.print(f"\nProduct with ID {record_id} not found.")
            return

        console.print(
            f"Current quantity for '{escape(record.name)}' is {record.quantity}.",
            highlight=False
        )
        delta = read_field(
            console,
            "Enter the change in quantity (positive to add, negative to remove): ",
            lambda raw: parse_int(raw, "quantity change")
        )
        try:
            new_quantity = self.repository.update_stock(record_id, delta)
        except NegativeStockError:
            _error("Cannot have negative stock. Operation cancelled.")
            return
        except InventoryError as e:
            _error(str(e))
            return
        console.print(f"\nStock updated successfully. New quantity: {new_quantity}")


@app.command()
def inventory(ctx: typer.Context):
    """Interactive inventory manager menu."""
    settings = _get_config(ctx).inventory
    session = InventorySession(
        InventoryRepository(capacity=settings.capacity),
        max_name_length=settings.max_name_length
    )
    _run_menu(
        "Inventory Management System",
        [
            ("Add a new product", session.add_product),
            ("Search for a product by ID", session.search_product),
            ("Display all products", session.list_products),
            ("Update product stock", session.update_stock),
        ],
        "Exiting the inventory management system. Goodbye!",
    )
    sys.exit(EXIT_CODE_OK)


# ---------------------------------------------------------------------------
# Matrix calculator
# ---------------------------------------------------------------------------

def _read_matrix(name: str, max_dimension: int) -> Matrix:
    console.print(f"\nEnter details for Matrix {name}:")
    rows = read_field(console, f"Enter number of rows (1-{max_dimension}): ",
                      lambda raw: parse_int(raw, "number of rows", 1, max_dimension))
    cols = read_field(console, f"Enter number of columns (1-{max_dimension}): ",
                      lambda raw: parse_int(raw, "number of columns", 1, max_dimension))

    console.print(f"Enter the elements of Matrix {name} ({rows} x {cols}):")
    values = []
    for i in range(rows):
        row = []
        for j in range(cols):
            label = f"element [{i}][{j}]"
            row.append(read_field(console, f"Element [{i}][{j}]: ",
                                  lambda raw, label=label: parse_int(raw, label)))
        values.append(row)
    return Matrix.from_rows(values, max_dimension=max_dimension)


def _display_matrix(title: str, matrix: Matrix) -> None:
    console.print(f"\n{title}")
    for row in matrix.values:
        cells = "".join(f"{value:<4} " for value in row)
        console.print(f"| {cells}|", markup=False, emoji=False, highlight=False, soft_wrap=True)


class MatrixSession:
    """Menu actions; each reads fresh matrices and keeps nothing between runs."""

    def __init__(self, max_dimension: int):
        self.max_dimension = max_dimension

    def add(self) -> None:
        a = _read_matrix("A", self.max_dimension)
        b = _read_matrix("B", self.max_dimension)
        try:
            result = add(a, b)
        except DimensionMismatchError as e:
            _error(f"Matrices must have the same dimensions for addition ({e}).")
            return
        _display_matrix("Result of Matrix A + Matrix B:", result)

    def multiply(self) -> None:
        a = _read_matrix("A", self.max_dimension)
        b = _read_matrix("B", self.max_dimension)
        try:
            result = multiply(a, b)
        except DimensionMismatchError as e:
            _error(f"Columns of Matrix A must equal rows of Matrix B for multiplication ({e}).")
            return
        _display_matrix("Result of Matrix A * Matrix B:", result)

    def transpose(self) -> None:
        a = _read_matrix("A", self.max_dimension)
        _display_matrix("Transpose of Matrix A:", transpose(a))


@app.command()
def matrix(ctx: typer.Context):
    """Interactive matrix calculator menu."""
    session = MatrixSession(_get_config(ctx).matrix.max_dimension)
    _run_menu(
        "Matrix Calculator",
        [
            ("Add two matrices", session.add),
            ("Multiply two matrices", session.multiply),
            ("Find the transpose of a matrix", session.transpose),
        ],
        "Exiting calculator. Goodbye!",
    )
    sys.exit(EXIT_CODE_OK)


if __name__ == "__main__":
    app()
