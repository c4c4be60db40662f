import json
from pathlib import Path
from typing import List, NoReturn, Optional, Tuple, cast

import typer
from omegaconf import DictConfig
from typing_extensions import Annotated

from rbo_metric.overlap import metrics, report
from rbo_metric.types.types import (
    ConfigurationError,
    DataError,
    InvalidParameterError,
    OutputFormat,
    RBOResult,
)
from rbo_metric.utils.config import ConfigManager
from rbo_metric.utils.logging_config import get_structured_logger, logging_context, setup_logging
from rbo_metric.utils.validation import OUTPUT_FORMATS

app = typer.Typer(
    help="Rank-Biased Overlap (RBO): a similarity measure for indefinite ranked lists. "
    "See Webber, Moffat and Zobel, ACM TOIS 2010."
)

logger = get_structured_logger(__name__)


def read_ranking(path: Path) -> List[str]:
    """Read one element per line, stripping whitespace and skipping blank lines."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return [line.strip() for line in f if line.strip()]
    except OSError as e:
        raise DataError(f"Cannot read ranked list file '{path}': {e.strerror}", cause=e)


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _load_settings(verbose: bool) -> DictConfig:
    try:
        config = ConfigManager.get_instance().config
    except ConfigurationError as e:
        _fail(e.message)
    setup_logging(
        level="DEBUG" if verbose else config.logging.level,
        fmt=config.logging.format,
        json_format=config.logging.json_format,
        force=True,
    )
    return config


def _compute(
    first_file: Path, second_file: Path, p: float
) -> Tuple[List[str], List[str], RBOResult]:
    try:
        first = read_ranking(first_file)
        second = read_ranking(second_file)
        with logging_context(comparison_id=f"{first_file.name}:{second_file.name}"):
            result = metrics.rank_biased_overlap(first, second, p)
            logger.debug("Computed RBO", **result.to_dict())
    except (InvalidParameterError, DataError) as e:
        logger.debug("Comparison failed", error=e.to_dict())
        _fail(e.message)
    return first, second, result


def _render(result: RBOResult, output_format: OutputFormat, precision: int) -> str:
    if output_format == "json":
        return json.dumps(result.to_dict(), indent=2)
    return result.format(precision)


@app.command()
def compare(
    first_file: Annotated[Path, typer.Argument(help="First ranked list, one element per line.")],
    second_file: Annotated[Path, typer.Argument(help="Second ranked list, one element per line.")],
    p: Annotated[
        Optional[float], typer.Option("-p", "--persistence", help="Persistence value, 0 < p < 1.")
    ] = None,
    output_format: Annotated[
        Optional[str], typer.Option("--format", help="Output format: text or json.")
    ] = None,
    precision: Annotated[
        Optional[int], typer.Option(help="Decimal places for text output.")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Compute RBO between two ranked list files and print min, residual and extrapolated scores.
    """
    config = _load_settings(verbose)
    p = config.persistence if p is None else p
    output_format = output_format or config.output_format
    precision = config.precision if precision is None else precision

    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"Unknown format: {output_format}")

    _, _, result = _compute(first_file, second_file, p)
    typer.echo(_render(result, cast(OutputFormat, output_format), precision))


@app.command("report")
def write_report(
    first_file: Annotated[Path, typer.Argument(help="First ranked list, one element per line.")],
    second_file: Annotated[Path, typer.Argument(help="Second ranked list, one element per line.")],
    p: Annotated[
        Optional[float], typer.Option("-p", "--persistence", help="Persistence value, 0 < p < 1.")
    ] = None,
    report_path: Annotated[
        str, typer.Option(help="Path to save the HTML report.")
    ] = "reports/rbo_report.html",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Compute RBO between two ranked list files and save an HTML report with the overlap by depth.
    """
    config = _load_settings(verbose)
    p = config.persistence if p is None else p

    first, second, result = _compute(first_file, second_file, p)

    Path(report_path).parent.mkdir(parents=True, exist_ok=True)
    report.generate_overlap_report(
        first, second, result, report_path, names=(first_file.name, second_file.name)
    )
    typer.echo(result.format(config.precision))
    typer.echo(f"Report saved to {report_path}")


if __name__ == "__main__":
    app()
