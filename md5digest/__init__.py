from md5digest.digest import Digest
from md5digest.engine import MD5, compress
from md5digest.helpers import md5, md5_file, md5_stream

__all__ = ["MD5", "Digest", "compress", "md5", "md5_file", "md5_stream"]
