import logging
import os
import sys

__version__ = "0.1.0"

log_level = os.environ.get('LOGLEVEL', 'INFO').upper()
logger = logging.getLogger(__name__)
handler = logging.StreamHandler(sys.stderr)
handler.setLevel(log_level)
logger.addHandler(handler)
logger.setLevel(log_level)

# urllib3 logs every connection at debug level, quiet it.
logging.getLogger("urllib3").setLevel("WARN")
