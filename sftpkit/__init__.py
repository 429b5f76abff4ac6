"""SFTP packet encoding and decoding, OpenSSH extensions, ls-style listings, globbing and response ordering."""

__version__ = "0.1.0"