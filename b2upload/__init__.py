#!/usr/bin/python3
import os

from .checksums import BlockDigest, FileDigester, file_digest
from .config import B2ConfigError, load_config
from .storage_client_b2 import B2Client, B2Error, UploadTarget
from .upload_client_b2 import UploadBody, UploadClient, UploadResult

# according to platform search for config file in home directory
if os.name == "nt":
    HOMEPATH = os.path.join(os.path.expanduser("~"), "AppData", "Local", "b2upload")
else:
    HOMEPATH = os.path.join(os.path.expanduser("~"), ".b2upload")


def sizeof_fmt(num, suffix="B"):
    """
    function to convert numerical size number into human readable number
    taken from https://stackoverflow.com/questions/1094841/reusable-library-to-get-human-readable-version-of-file-size
    """
    for unit in ["", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi"]:
        if abs(num) < 1024.0:
            return f"{num:3.1f}{unit}{suffix}"
        num /= 1024.0
    return f"{num:.1f}Yi{suffix}"
