import argparse
import logging
import sys

from md5digest.helpers import md5, md5_file, md5_stream

logger = logging.getLogger("md5digest")

# RFC 1321, appendix A.5
RFC1321_VECTORS = (
    (b"", "d41d8cd98f00b204e9800998ecf8427e"),
    (b"a", "0cc175b9c0f1b6a831c399e269772661"),
    (b"abc", "900150983cd24fb0d6963f7d28e17f72"),
    (b"message digest", "f96b697d7cb7938d525a2f31aaf161d0"),
    (b"abcdefghijklmnopqrstuvwxyz", "c3fcd3d76192e4007dfb496cca67e13b"),
    (b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
     "d174ab98d277d9f5a5611c2c9f419d9f"),
    (b"1234567890" * 8, "57edf4a22be3c955ac49da2e2107b67a"),
)


def self_test() -> bool:
    ok = True
    for message, expected in RFC1321_VECTORS:
        got = md5(message)
        if got == expected:
            logger.info(f"MD5({message!r}) = {got}")
        else:
            logger.error(f"MD5({message!r}) = {got}, expected {expected}")
            ok = False
    return ok


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="md5digest", description="Print MD5 (RFC 1321) digests.")
    parser.add_argument("files", nargs="*", help="files to hash; '-' reads standard input")
    parser.add_argument("-s", "--string", action="append", default=[], help="hash a literal string")
    parser.add_argument("--self-test", action="store_true", help="run the RFC 1321 test suite")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    status = 0
    if args.self_test:
        if self_test():
            logger.info("Self-test passed")
        else:
            logger.error("Self-test failed")
            status = 1

    for text in args.string:
        print(f'{md5(text)}  "{text}"')

    files = args.files
    if not files and not args.string and not args.self_test:
        files = ["-"]
    for path in files:
        try:
            if path == "-":
                print(f"{md5_stream(sys.stdin.buffer)}  -")
            else:
                print(f"{md5_file(path)}  {path}")
        except OSError as e:
            logger.error(f"{path}: {e}")
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
