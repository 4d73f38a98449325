import logging
import sys

import click

from .components import AsyncLoop
from .components.config import load_parameters, start_metrics_server
from .components.logs import configure_logging
from .model import FullDocumentMode, Scenario
from .pipeline import Consumer, RunOutcome
from .store import MongoStore

configure_logging()
logger = logging.getLogger(__name__)


@click.command()
@click.option("--configfile", help="The .yaml configuration file to use")
@click.option(
    "--full-document",
    "-f",
    "full_document",
    type=click.Choice(FullDocumentMode.choices()),
    required=True,
    help="Change stream fullDocument option",
)
@click.option(
    "--batch-size",
    "-b",
    "batch_size",
    type=click.IntRange(min=1),
    required=True,
    help="Number of events processed together",
)
def main(configfile: str, full_document: str, batch_size: int):
    params = load_parameters(configfile)
    scenario = Scenario(FullDocumentMode(full_document), batch_size)

    start_metrics_server(params.metrics.port)

    consumer = Consumer(MongoStore(params.store), scenario, params.consumer)
    outcome = AsyncLoop.run(consumer.start, consumer.stop, on_interrupt=RunOutcome.Interrupted)

    logger.info("Consumer exited", {"outcome": outcome.value, "exit_code": outcome.exit_code})
    sys.exit(outcome.exit_code)


if __name__ == "__main__":
    main()
