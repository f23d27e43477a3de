from pathlib import Path
from typing import Annotated

import typer

from textanalysis.analysis.exceptions import AnalysisError
from textanalysis.analysis.factory import TextAnalyzerFactory, create_session
from textanalysis.config.settings import Settings
from textanalysis.logging.logger import Log
from textanalysis.report.writer import write_report
from textanalysis.storage.s3_adapter import S3StorageAdapter

app = typer.Typer(
    add_completion=False,
    help="Analyse an S3 text document for sentiment, entities and key phrases.",
)


@app.command()
def analyse(
    input_key: Annotated[
        str, typer.Option("--input", help="Key of the input file in the input bucket")
    ],
    output: Annotated[Path, typer.Option("--output", help="Path of the JSON report to write")],
) -> None:
    """Entry point: session -> download -> analyse -> write report."""
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        session = create_session(settings)
        storage = S3StorageAdapter(session.client("s3"))
        text_bytes = storage.download(settings.input_bucket, input_key)
    except AnalysisError as exc:
        Log.error(str(exc))
        raise typer.Exit(code=1) from exc

    analyzer = TextAnalyzerFactory.create(settings, session, storage=storage)
    result, error = analyzer.run(input_key, text_bytes)
    if error is not None:
        Log.error(f"Text analysis incomplete: {error}")

    try:
        write_report(result, output)
    except OSError as exc:
        Log.error(f"Unable to write output file {output}: {exc}")
        raise typer.Exit(code=1) from exc

    if error is not None:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
