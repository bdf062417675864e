"""Rich console summary of a built feed."""
import io

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from jsonfeeder.utils import relative_time, to_utc


class ConsoleFormatter:
    def format(self, doc: dict) -> str:
        items = doc.get("items", [])
        console = Console(record=True, width=120, file=io.StringIO())
        console.print(Panel(f"[bold cyan]{escape(doc['title'])}[/] — {len(items)} items", expand=False))
        for key in ("home_page_url", "feed_url", "next_url", "description"):
            if key in doc:
                console.print(f"[dim]{key}:[/] {escape(doc[key])}")

        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right")
        table.add_column("Title")
        table.add_column("Published")
        table.add_column("Tags")
        for i, item in enumerate(items, 1):
            published = to_utc(item.get("date_published"))
            if published:
                ts = f"{published.strftime('%Y-%m-%d %H:%M')} ({relative_time(published)})"
            else:
                ts = "—"
            table.add_row(str(i), escape(item.get("title") or item["id"]), ts, escape(", ".join(item.get("tags", []))))
        console.print(table)

        return console.export_text()
