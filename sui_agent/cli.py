import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.live import Live
from rich.prompt import Prompt
from rich.spinner import Spinner
from rich.table import Table
from typing_extensions import Annotated

from sui_agent.client.sui_agent import SuiAgent

# --- Basic Logging Configuration ---
logging.basicConfig(level=logging.WARNING, format="%(levelname)s:%(name)s:%(message)s")
# --- End Logging Configuration ---

app = typer.Typer()
console = Console()

ConfigOption = Annotated[
    Optional[str], typer.Option(help="Path to a JSON or Python configuration file.")
]
ApiKeyOption = Annotated[
    Optional[str],
    typer.Option(envvar="ATOMA_API_KEY", help="Atoma API key, used without --config."),
]
ModelOption = Annotated[
    Optional[str],
    typer.Option(envvar="ATOMA_CHAT_COMPLETIONS_MODEL", help="Chat model override."),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging.")]


def _set_verbose(verbose: bool) -> None:
    if verbose:
        logging.getLogger("sui_agent").setLevel(logging.DEBUG)


def load_agent(
    config: Optional[str], api_key: Optional[str], model: Optional[str]
) -> SuiAgent:
    """Build an agent from a config file, or from an API key when none is given."""
    try:
        if config:
            return SuiAgent(config_path=config)
        if not api_key:
            console.print(
                "[bold red]Error:[/bold red] provide --config or set ATOMA_API_KEY"
            )
            raise typer.Exit(code=1)
        atoma = {"api_key": api_key}
        if model:
            atoma["model"] = model
        return SuiAgent(config={"atoma": atoma})
    except FileNotFoundError:
        console.print(
            f"[bold red]Error:[/bold red] Configuration file not found at '{config}'"
        )
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[bold red]Error loading configuration:[/bold red] {e}")
        raise typer.Exit(code=1)


def print_answers(answers) -> None:
    console.print_json(data=[answer.model_dump(mode="json") for answer in answers])


@app.command()
def query(
    text: Annotated[str, typer.Argument(help="The query to run.")],
    wallet_address: Annotated[
        Optional[str], typer.Option(help="Wallet address of the user.")
    ] = None,
    config: ConfigOption = None,
    api_key: ApiKeyOption = None,
    model: ModelOption = None,
    verbose: VerboseOption = False,
):
    """Run a single query and print the structured answer as JSON."""
    _set_verbose(verbose)
    agent = load_agent(config, api_key, model)
    with console.status("[bold green]Thinking...", spinner="dots"):
        answers = asyncio.run(agent.process(text, wallet_address))
    print_answers(answers)
    if any(answer.status == "failure" for answer in answers):
        raise typer.Exit(code=1)


@app.command()
def chat(
    wallet_address: Annotated[
        Optional[str], typer.Option(help="Wallet address of the user.")
    ] = None,
    config: ConfigOption = None,
    api_key: ApiKeyOption = None,
    model: ModelOption = None,
    verbose: VerboseOption = False,
):
    """
    Start an interactive session with the Sui Agent.
    Type 'exit' or 'quit' to end the session.
    """
    _set_verbose(verbose)
    with console.status("[bold green]Initializing agent...", spinner="dots"):
        agent = load_agent(config, api_key, model)
    console.print("[green]Agent initialized. Start chatting![/green]")
    console.print("[dim]Type 'exit' or 'quit' to end.[/dim]")

    try:
        # one loop for the whole session, the completion client's pool is bound to it
        asyncio.run(chat_session(agent, wallet_address))
    except KeyboardInterrupt:
        console.print("\n[yellow]Exiting chat session (KeyboardInterrupt).[/yellow]")


async def chat_session(agent: SuiAgent, wallet_address: Optional[str] = None) -> None:
    """Read messages until 'exit', 'quit' or end of input."""
    while True:
        try:
            user_message = await asyncio.to_thread(
                Prompt.ask, "[bold green]You[/bold green]", console=console
            )
        except EOFError:
            console.print("\n[yellow]Exiting chat session.[/yellow]")
            break

        if user_message.lower() in ["exit", "quit"]:
            console.print("[yellow]Exiting chat session.[/yellow]")
            break

        if not user_message.strip():
            continue

        with Live(console=console, refresh_per_second=10, transient=True) as live:
            live.update(Spinner("dots", "Thinking..."))
            answers = await agent.process(user_message, wallet_address)

        for answer in answers:
            color = "bright_blue" if answer.status == "success" else "red"
            console.print(f"[{color}]Agent:[/{color}] {answer.response}")
            for error in answer.errors:
                console.print(f"[dim red]{error}[/dim red]")


@app.command()
def tools(
    config: ConfigOption = None,
    api_key: ApiKeyOption = None,
    model: ModelOption = None,
):
    """List the registered tools."""
    agent = load_agent(config, api_key, model)
    table = Table(title="Registered tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Parameters", style="dim")
    for tool in agent.list_tools():
        params = ", ".join(
            f"{p['name']}: {p['type']}" + ("" if p["required"] else "?")
            for p in tool["parameters"]
        )
        table.add_row(tool["name"], tool["description"], params)
    console.print(table)


@app.command()
def health(
    config: ConfigOption = None,
    api_key: ApiKeyOption = None,
    model: ModelOption = None,
    verbose: VerboseOption = False,
):
    """Check that the completion service answers."""
    _set_verbose(verbose)
    agent = load_agent(config, api_key, model)
    with console.status("[bold green]Contacting completion service...", spinner="dots"):
        healthy = asyncio.run(agent.health_check())
    if healthy:
        console.print("[green]Completion service is healthy ✅[/green]")
    else:
        console.print("[bold red]Completion service check failed ❌[/bold red]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
