#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries from the host for later writing into RAM.  ROMs
are raw CHIP-8 bytecode with no header.  Read failures are reported as
LoaderError, so the caller doesn't have to know about every possible OSError.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class LoaderError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        try:
            with open(filename, "rb") as f:
                return f.read()
        except OSError as error:
            raise LoaderError("Unable to read '{}': {}".format(filename, error.strerror or error)) from error
