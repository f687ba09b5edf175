#!/usr/bin/python3
import logging
import sys

logging.basicConfig(level=logging.INFO, format="%(message)s")
logging.getLogger("requests").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)

# own modules
from b2upload.simple_upload import main

if __name__ == "__main__":
    sys.exit(main(set_log_level=True))
