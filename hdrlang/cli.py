"""Command-line interface for hdrlang."""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape
from rich.table import Table

from . import __version__
from .classifier import RuleTable
from .config import RULES_FILE_ENV, Config, get_config_dir
from .errors import RuleSourceError
from .logging import setup_logging
from .models import Language
from .resolver import Document, HeaderResolver
from .theme import console, language_text, percent_bar


def _parse_language(ctx, param, value: Optional[str]) -> Optional[Language]:
    if value is None:
        return None
    try:
        return Language.from_name(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


def _load_table(config: Config, rules_file: Optional[Path]) -> RuleTable:
    """Create the rule table from --rules, the config, or the built-in set."""
    path = rules_file or config.rules_path
    if path is None:
        return RuleTable.default()
    try:
        return RuleTable.from_file(path)
    except RuleSourceError as e:
        console.print(f"[error]{escape(e.message)}[/error]")
        if e.cause:
            console.print(f"[muted]{escape(str(e.cause))}[/muted]")
        sys.exit(1)


def _print_diagnostics(table: RuleTable) -> None:
    for error in table.diagnostics:
        console.print(f"[warning]! {escape(error.message)}[/warning]")
        if error.cause:
            console.print(f"  [muted]{escape(str(error.cause))}[/muted]")


rules_option = click.option(
    "--rules",
    "rules_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON rules file to use instead of the configured rules",
)


@click.group()
@click.version_option(version=__version__, prog_name="hdrlang")
@click.option("--verbose", "-v", is_flag=True, help="Show the per-rule match trace")
@click.option("--json-logs", is_flag=True, help="Emit log records as JSON")
def main(verbose: bool, json_logs: bool):
    """hdrlang - tell C, C++, Objective-C and Objective-C++ headers apart.

    Scores header text against weighted pattern rules and reports the most
    likely language.
    """
    config = Config.load()
    setup_logging(
        verbose=verbose,
        json_format=json_logs or config.logging.json_format,
        log_to_file=config.logging.log_to_file,
        level=config.logging.level,
    )


@main.command("classify")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@rules_option
@click.option(
    "--current",
    callback=_parse_language,
    help="Language the files are currently assigned (kept when there is no verdict)",
)
@click.option("--all", "include_all", is_flag=True, help="Classify files regardless of their name")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def classify_cmd(
    paths: tuple[Path, ...],
    rules_file: Optional[Path],
    current: Optional[Language],
    include_all: bool,
    as_json: bool,
):
    """Classify one or more header files."""
    config = Config.load()
    results = []

    with _load_table(config, rules_file) as table:
        resolver = HeaderResolver(table, config)

        for path in paths:
            try:
                document = Document.from_file(path, language=current)
            except OSError as e:
                results.append({"path": str(path), "error": str(e)})
                continue

            if not include_all and not resolver.is_eligible(document):
                results.append({"path": str(path), "skipped": True})
                continue

            verdict = resolver.classify(document)
            results.append(
                {
                    "path": str(path),
                    "verdict": verdict,
                    "language": verdict.resolve(current),
                }
            )

    if as_json:
        console.print_json(
            data=[
                {
                    "path": r["path"],
                    "skipped": r.get("skipped", False),
                    "error": r.get("error"),
                    "language": r["language"].value if r.get("language") else None,
                    "verdict": r["verdict"].to_dict() if "verdict" in r else None,
                }
                for r in results
            ]
        )
        return

    out = Table(show_header=True)
    out.add_column("File", style="path")
    out.add_column("Verdict")
    out.add_column("Confidence", justify="right")
    out.add_column("Language")

    for r in results:
        if "error" in r:
            out.add_row(escape(r["path"]), "[error]unreadable[/error]", "", "")
        elif r.get("skipped"):
            out.add_row(escape(r["path"]), "[muted]skipped[/muted]", "", "")
        else:
            verdict = r["verdict"]
            out.add_row(
                escape(r["path"]),
                language_text(verdict.language, unchanged="no opinion"),
                f"{verdict.confidence * 100:.1f}%" if verdict.has_opinion else "",
                language_text(r["language"]),
            )

    console.print(out)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@rules_option
def explain(path: Path, rules_file: Optional[Path]):
    """Show which rules matched a file and how each language scored."""
    config = Config.load()

    with _load_table(config, rules_file) as table:
        resolver = HeaderResolver(table, config)
        try:
            document = Document.from_file(path)
        except OSError as e:
            console.print(f"[error]{escape(str(e))}[/error]")
            sys.exit(1)
        verdict = resolver.classify(document)

    rule_table = Table(title="Rules", show_header=True)
    rule_table.add_column("#", justify="right")
    rule_table.add_column("Languages")
    rule_table.add_column("Weight", justify="right")
    rule_table.add_column("Pattern")
    rule_table.add_column("Match")

    for i, (rule, matched) in enumerate(verdict.matches, 1):
        if rule.inert:
            status = "[inert]inert[/inert]"
        elif matched:
            status = "[matched]yes[/matched]"
        else:
            status = "[unmatched]no[/unmatched]"
        rule_table.add_row(
            str(i),
            rule.describe_languages(),
            f"{rule.weight:.2f}",
            escape(rule.pattern),
            status,
        )

    score_table = Table(title="Summary", show_header=True)
    score_table.add_column("Language")
    score_table.add_column("Value", justify="right")
    score_table.add_column("Total", justify="right")
    score_table.add_column("Score")

    for lang, score in verdict.scores.items():
        score_table.add_row(
            language_text(lang),
            f"{score.value:.2f}",
            str(score.total),
            percent_bar(score.average),
        )

    console.print(rule_table)
    console.print(score_table)
    console.print("Verdict: ", language_text(verdict.language, unchanged="no opinion"))


@main.command()
@rules_option
def rules(rules_file: Optional[Path]):
    """List the rules used for classification."""
    config = Config.load()

    with _load_table(config, rules_file) as table:
        compiled = table.rules()

        if not compiled:
            console.print("No usable rules.")
        else:
            out = Table(show_header=True)
            out.add_column("#", justify="right")
            out.add_column("Languages")
            out.add_column("Weight", justify="right")
            out.add_column("Pattern")
            out.add_column("Status")

            for i, rule in enumerate(compiled, 1):
                out.add_row(
                    str(i),
                    rule.describe_languages(),
                    f"{rule.weight:.2f}",
                    escape(rule.pattern),
                    "[inert]inert[/inert]" if rule.inert else "[success]ok[/success]",
                )
            console.print(out)

        _print_diagnostics(table)


@main.command("config")
@click.option("--show", is_flag=True, help="Show current config")
@click.option("--rules-file", help="JSON rules file to use by default ('' for built-in rules)")
@click.option("--suffix", "suffixes", multiple=True, help="Header suffix to classify (repeatable)")
@click.option(
    "--extensionless/--no-extensionless",
    default=None,
    help="Whether files without an extension are classified",
)
def config_cmd(
    show: bool,
    rules_file: Optional[str],
    suffixes: tuple[str, ...],
    extensionless: Optional[bool],
):
    """View or modify configuration."""
    config = Config.load()
    changed = False

    if rules_file is not None:
        config.rules.rules_file = rules_file or None
        changed = True
        console.print(f"Rules file: {config.rules.rules_file or 'built-in'}")

    if suffixes:
        config.filters.header_suffixes = list(suffixes)
        changed = True
        console.print(f"Header suffixes: {', '.join(suffixes)}")

    if extensionless is not None:
        config.filters.allow_extensionless = extensionless
        changed = True
        console.print(f"Extensionless files: {'yes' if extensionless else 'no'}")

    if changed:
        config.save()

    if show or not changed:
        console.print("\n[bold]Current Configuration[/bold]")
        console.print(f"  Config dir: {get_config_dir()}")
        console.print(f"  Rules file: {config.rules.rules_file or 'built-in'}")
        if config.env_rules_file:
            console.print(f"  Rules file override ({RULES_FILE_ENV}): {config.env_rules_file}")
        console.print(f"  Header suffixes: {', '.join(config.filters.header_suffixes)}")
        console.print(f"  Extensionless files: {config.filters.allow_extensionless}")
        console.print(f"  Max text length: {config.filters.max_text_length or 'unlimited'}")
        console.print(f"  Log level: {config.logging.level}")


if __name__ == "__main__":
    main()
