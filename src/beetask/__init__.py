"""Build and run BeeWare applications for a target platform."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
