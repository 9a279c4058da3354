import logging
from typing import Optional

import uvicorn

from doccrawl.api.server import create_app
from doccrawl.container import Container

logger = logging.getLogger(__name__)


def main(container: Optional[Container] = None):
    """Start the doccrawl API server.

    Accepts an injected container so tests can swap providers.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    container = container or Container()
    app = create_app(container)

    host = container.config.DOCCRAWL_HOST()
    port = container.config.DOCCRAWL_PORT()
    logger.info("doccrawl API listening on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == '__main__':
    main()
