#!/usr/bin/python3
"""
file checksums computed block by block without reading the whole file into memory
"""
import hashlib
import logging

DIGEST_BLOCKSIZE = 4096


class BlockDigest:
    """
    incremental digest where the last block has to be marked explicitly

    after transform_final_block no more data is accepted
    """

    def __init__(self, hashfunc=hashlib.sha1):
        self._digest = hashfunc()
        self._final = False

    def transform_block(self, data: bytes) -> None:
        """feed some non-final block"""
        if self._final:
            raise ValueError("digest already finalized")
        self._digest.update(data)

    def transform_final_block(self, data: bytes) -> str:
        """
        feed the last block and finalize

        :param data <bytes>: last block, may be empty
        :return <str>: lowercase hexdigest
        """
        if self._final:
            raise ValueError("digest already finalized")
        self._digest.update(data)
        self._final = True
        return self._digest.hexdigest()

    def hexdigest(self) -> str:
        if not self._final:
            raise ValueError("digest not finalized yet")
        return self._digest.hexdigest()


class FileDigester:
    """
    computes the digest of a file reading one block ahead,
    so the final block is known when it is handed to BlockDigest

    blocksize is fixed at construction
    """

    def __init__(self, blocksize: int = DIGEST_BLOCKSIZE, hashfunc=hashlib.sha1):
        if blocksize <= 0:
            raise ValueError(f"blocksize must be positive, got {blocksize}")
        self._blocksize = blocksize
        self._hashfunc = hashfunc
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def blocksize(self):
        """return blocksize"""
        return self._blocksize

    @property
    def hashfunc(self):
        """returning used hashfunc"""
        return self._hashfunc

    def _new_digest(self):
        return BlockDigest(self.hashfunc)

    def hexdigest(self, filename: str):
        """
        return hexdigest of file content, or None if the file could not be read

        :param filename <str>: path to existing regular file
        :return <str>: lowercase hexdigest or None
        """
        digest = self._new_digest()
        blocks = 0
        try:
            with open(filename, "rb") as infile:
                lookahead = infile.read(self._blocksize)
                while True:
                    current = lookahead
                    lookahead = infile.read(self._blocksize)
                    blocks += 1
                    if not lookahead:
                        hexdigest = digest.transform_final_block(current)
                        break
                    digest.transform_block(current)
        except OSError as exc:
            self._logger.error(f"unable to compute checksum of {filename}: {exc}")
            return None
        self._logger.debug(f"{filename} digested in {blocks} blocks of {self._blocksize}: {hexdigest}")
        return hexdigest


def file_digest(filename: str, blocksize: int = DIGEST_BLOCKSIZE):
    """sha1 hexdigest of file, None if unavailable"""
    return FileDigester(blocksize=blocksize).hexdigest(filename)
