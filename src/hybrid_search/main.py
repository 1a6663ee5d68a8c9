import json
from pathlib import Path
from typing import Annotated, Any, Optional

from rich.console import Console
from rich.table import Table
from typer import Exit, Option, Typer, echo

from .config import resolve_settings
from .logging_config import configure_logging
from .models import ToolOutput
from .tools import EmbeddingLookupTool, HybridSearchTool

app = Typer(help="Hybrid lexical and vector retrieval over JSON corpora.")


@app.callback()
def setup(
    log_level: Annotated[
        Optional[str],
        Option("--log-level", help="Log level (defaults to HYBRID_SEARCH_LOG_LEVEL or INFO)."),
    ] = None,
) -> None:
    settings = resolve_settings(log_level=log_level)
    configure_logging(settings.log_level, settings.log_format)


def _load_records(console: Console, path: Path) -> list[Any]:
    try:
        records = json.loads(path.read_text())
    except (OSError, ValueError) as exc:
        console.print(f"[bold red]Could not read {path}:[/] {exc}")
        raise Exit(code=1)
    if not isinstance(records, list):
        console.print(f"[bold red]{path} must contain a JSON array of records.[/]")
        raise Exit(code=1)
    return records


def _fail_on_error(console: Console, result: ToolOutput) -> dict[str, Any]:
    if not result.success or result.output is None:
        console.print(f"[bold red]{result.tool_name} failed:[/] {result.error}")
        raise Exit(code=1)
    return result.output


@app.command()
def search(
    query: Annotated[str, Option("--query", "-q", help="Free-text query.")],
    documents: Annotated[
        Path,
        Option("--documents", "-d", help="JSON file with [{id, text, embedding?, metadata?}]."),
    ],
    top_k: Annotated[int, Option("--top-k", "-k", help="Maximum results (1-50).")] = 5,
    text_weight: Annotated[float, Option("--text-weight", help="Lexical weight (0-1).")] = 0.6,
    vector_weight: Annotated[float, Option("--vector-weight", help="Vector weight (0-1).")] = 0.4,
    as_json: Annotated[bool, Option("--json", help="Print the raw tool output.")] = False,
) -> None:
    """Rank a corpus file against a query with hybrid scoring."""
    console = Console()
    records = _load_records(console, documents)
    result = HybridSearchTool().execute(
        {
            "query": query,
            "documents": records,
            "top_k": top_k,
            "text_weight": text_weight,
            "vector_weight": vector_weight,
        }
    )
    output = _fail_on_error(console, result)
    if as_json:
        echo(json.dumps(output, indent=2))
        return

    strategy = output["strategy"]
    table = Table(
        title=(
            f"Results for {output['query']!r} "
            f"(text {strategy['text_weight']:.2f} / vector {strategy['vector_weight']:.2f})"
        ),
        title_justify="left",
    )
    table.add_column("#", justify="right")
    table.add_column("id", style="bold cyan", no_wrap=True)
    table.add_column("score", justify="right")
    table.add_column("source")
    table.add_column("text", justify="right")
    table.add_column("vector", justify="right")
    table.add_column("snippet")
    for rank, match in enumerate(output["results"], start=1):
        table.add_row(
            str(rank),
            match["id"],
            f"{match['score']:.4f}",
            match["source"],
            f"{match['breakdown']['text_score']:.4f}",
            f"{match['breakdown']['vector_score']:.4f}",
            match["snippet"],
        )
    console.print(table)
    if not output["results"]:
        console.print("[yellow]No matching documents.[/]")


@app.command()
def lookup(
    query: Annotated[str, Option("--query", "-q", help="Query text to embed.")],
    index: Annotated[
        Path,
        Option("--index", "-i", help="JSON file with [{id, embedding, metadata?}]."),
    ],
    top_k: Annotated[int, Option("--top-k", "-k", help="Maximum matches (1-50).")] = 5,
    min_score: Annotated[float, Option("--min-score", help="Similarity floor (0-1).")] = 0.2,
    as_json: Annotated[bool, Option("--json", help="Print the raw tool output.")] = False,
) -> None:
    """Find the records nearest to a query embedding."""
    console = Console()
    records = _load_records(console, index)
    result = EmbeddingLookupTool().execute(
        {"query": query, "index": records, "top_k": top_k, "min_score": min_score}
    )
    output = _fail_on_error(console, result)
    if as_json:
        echo(json.dumps(output, indent=2))
        return

    table = Table(
        title=f"Matches for {output['query']!r} ({output['used_index_size']} indexed)",
        title_justify="left",
    )
    table.add_column("#", justify="right")
    table.add_column("id", style="bold cyan", no_wrap=True)
    table.add_column("score", justify="right")
    table.add_column("metadata")
    for rank, match in enumerate(output["matches"], start=1):
        table.add_row(
            str(rank),
            match["id"],
            f"{match['score']:.4f}",
            json.dumps(match["metadata"]) if match["metadata"] is not None else "",
        )
    console.print(table)
    if not output["matches"]:
        console.print("[yellow]No records above the score floor.[/]")


@app.command()
def serve(
    host: Annotated[str, Option("--host", help="Bind address.")] = "127.0.0.1",
    port: Annotated[int, Option("--port", help="Bind port.")] = 8000,
) -> None:
    """Run the HTTP server."""
    from .server import run_server

    run_server(host=host, port=port)
