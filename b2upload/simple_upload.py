#!/usr/bin/python3
"""
upload one file to a B2 bucket

authorize -> resolve bucket -> get upload url -> hash file -> stream file
"""
import logging
import os
import sys

from . import HOMEPATH, sizeof_fmt
from .checksums import FileDigester
from .config import B2ConfigError, load_config
from .storage_client_b2 import B2Client, B2Error
from .upload_client_b2 import UploadClient

logger = logging.getLogger(__name__)

USAGE = "ERROR: usage: b2upload.py <Account ID> <Application Key> <Bucket> <Path of file to upload>"


def print_progress(fraction: float) -> None:
    """overwrite current console line with percentage"""
    print(f"\r{fraction:.2%}  ", end="", flush=True)


def print_sent() -> None:
    """body is out, waiting for B2 to confirm"""
    print(os.linesep + "Finalizing Upload... ", end="", flush=True)


def upload_file(client: B2Client, bucket_name: str, filename: str, config: dict) -> bool:
    """
    run the whole sequence for one file, printing what happens

    :return <bool>: True if B2 confirmed the upload with a file id
    """
    print("Getting Auth Token... ", end="", flush=True)
    client.authorize_account()
    print("Done.")

    print("Getting Bucket ID... ", end="", flush=True)
    bucket_id = client.get_bucket_id(bucket_name)
    print(f" Done.  Bucket ID: {bucket_id}")

    print("Getting Upload URL... ", end="", flush=True)
    target = client.get_upload_url(bucket_id)
    print("Done.")

    print(f"Uploading File: {os.path.basename(filename)} {sizeof_fmt(os.path.getsize(filename))}")
    checksum = FileDigester(blocksize=config["DIGEST_BLOCKSIZE"]).hexdigest(filename)
    if checksum is None:
        print(f"Failed to Upload file: unable to compute checksum of {filename}")
        return False
    logger.debug(f"sha1 checksum of {filename}: {checksum}")

    uploader = UploadClient(blocksize=config["UPLOAD_BLOCKSIZE"], timeout=config["TIMEOUT"])
    result = uploader.upload(filename, target, checksum, progress=print_progress, sent=print_sent)
    if not result.ok:
        print()
        print(result.error)
        return False
    print(f"Done.  File ID: {result.file_id}")
    return True


def main(argv=None, homepath: str = HOMEPATH, set_log_level: bool = False) -> int:
    """
    command line entry, returns exit code

    :param argv <list>: account id, application key, bucket name, filename
    :param homepath <str>: directory of optional b2upload.yml
    :param set_log_level <bool>: apply LOG_LEVEL of config to root logger, only for the script
    """
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 4:
        print(USAGE)
        return 1
    account_id, application_key, bucket_name, filename = argv

    if not os.path.isfile(filename):
        print("File to upload does not exist!")
        return 1

    try:
        config = load_config(homepath)
    except B2ConfigError as exc:
        print(f"ERROR: {exc}")
        return 1
    if set_log_level:
        logging.getLogger("").setLevel(config["LOG_LEVEL"])

    client = B2Client(account_id, application_key, api_url=config["API_URL"], timeout=config["TIMEOUT"])
    try:
        if not upload_file(client, bucket_name, filename, config):
            return 1
    except B2Error as exc:
        print()
        print(exc.response_text if exc.response_text is not None else exc)
        return 1
    except OSError as exc:
        print()
        print(f"Failed to Upload file: {exc}")
        return 1
    except KeyboardInterrupt:
        print()
        print("upload interrupted")
        return 1

    print(os.linesep + "All Done!")
    return 0
