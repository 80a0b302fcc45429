import json
import os
import sys
import logging
import argparse
# Set up logger
logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

ch = logging.StreamHandler()
ch.setLevel(logging.INFO)

formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s')

ch.setFormatter(formatter)

logger.addHandler(ch)

ACCOUNT_KEY_SETTING = "AZURE_STORAGE_ACCOUNT_KEY"

current_file_path = os.path.dirname(__file__)

# Add the directory containing the modules to the `PYTHONPATH`
src_dir = os.path.abspath(os.path.join(current_file_path, '..', 'src'))
sys.path.insert(0, src_dir)

from signing.authorization import AccountKeyAuthorizationService  # noqa:E402 (module level import not at top of file)
from signing.deriver import derive_read_url  # noqa:E402
from signing.errors import SignedUrlError  # noqa:E402
from signing.models import AccessWindow, BlobLocator  # noqa:E402


def load_local_settings(path: str):
    """Copies the `Values` of a local.settings.json file into the environment, if the file exists"""
    if not os.path.exists(path):
        return
    with open(path, 'r') as f:
        settings = json.load(f)
    for key, value in settings.get('Values', {}).items():
        os.environ.setdefault(key, value)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Print a signed read url for a blob')
    parser.add_argument('--account-name', required=True)
    parser.add_argument('--container', required=True)
    parser.add_argument('--blob', required=True)
    parser.add_argument('--start', type=str, default='2021-01-01', help='First instant the url is valid')
    parser.add_argument('--expiry', type=str, default='2030-01-01', help='Instant the url stops being valid')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    load_local_settings(os.path.join(src_dir, 'local.settings.json'))

    account_key = os.getenv(ACCOUNT_KEY_SETTING)
    if not account_key:
        logger.error(f"{ACCOUNT_KEY_SETTING} is not set")
        return 1

    try:
        window = AccessWindow.from_iso(args.start, args.expiry)
        url = derive_read_url(BlobLocator(args.account_name, args.container, args.blob),
                              window,
                              AccountKeyAuthorizationService(account_key))
    except (SignedUrlError, ValueError) as e:
        logger.error(f"could not derive url: {e}")
        return 1

    logger.info(f"Signed url for `{args.blob}` valid until {window.not_after_utc.isoformat()}")
    print(url)
    return 0


if __name__ == '__main__':
    sys.exit(main())
