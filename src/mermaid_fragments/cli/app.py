import typer

from mermaid_fragments.cli.fragment import fragment_app
from mermaid_fragments.cli.issue import issue_app
from mermaid_fragments.cli.page import page_app
from mermaid_fragments.cli.serve import serve_app

app = typer.Typer(
    name="mermaid-fragments",
    help="Mermaid Fragments CLI: read and update diagrams embedded in Confluence and Jira.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(fragment_app, name="fragment")
app.add_typer(page_app, name="page")
app.add_typer(issue_app, name="issue")
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
