import logging
import sys

import click
from pymongo.errors import PyMongoError

from ..components import AsyncLoop
from ..components.config import load_parameters
from ..components.logs import configure_logging
from ..store import MongoStore, StoreConnectionError
from .workload import WorkloadGenerator

configure_logging()
logger = logging.getLogger(__name__)


@click.command()
@click.option("--configfile", help="The .yaml configuration file to use")
@click.option("--num-docs", "-n", type=click.IntRange(min=1), required=True, help="Documents to create")
@click.option("--doc-size", "-s", type=click.IntRange(min=0), required=True, help="Document size (KB)")
def main(configfile: str, num_docs: int, doc_size: int):
    params = load_parameters(configfile)
    store = MongoStore(params.store)

    async def process() -> int:
        try:
            await store.connect()
        except StoreConnectionError as err:
            logger.error("Could not connect to the store", {"error": str(err)})
            return 1

        try:
            await WorkloadGenerator(store, params.generator).run(num_docs, doc_size)
        except PyMongoError as err:
            logger.error("Workload failed", {"error": str(err)})
            return 1
        return 0

    exit_code = AsyncLoop.run(process, store.close, on_interrupt=130)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
