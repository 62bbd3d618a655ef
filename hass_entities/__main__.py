#!/usr/bin/env python
"""Entry point for running the server as a module"""

from hass_entities.server import main


if __name__ == "__main__":
    main()
