import base64
import importlib.util
import io
import os
import sys
import unittest
from contextlib import redirect_stdout
from unittest import mock

# Add the directory containing the modules to the `PYTHONPATH`
sys.path.insert(0, os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "src")))

import signing.authorization as authorization  # noqa:E402 (module level import not at top of file)

script_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "scripts", "sign_url.py"))
script_spec = importlib.util.spec_from_file_location("sign_url", script_path)
sign_url = importlib.util.module_from_spec(script_spec)
script_spec.loader.exec_module(sign_url)

FAKE_ACCOUNT_KEY = base64.b64encode(b"0" * 64).decode("utf-8")
ARGS = ["--account-name", "acct1", "--container", "zips", "--blob", "app.zip"]


class TestSignUrl(unittest.TestCase):
    def test_main_prints_signed_url(self):
        stdout = io.StringIO()
        with mock.patch.dict(os.environ, {sign_url.ACCOUNT_KEY_SETTING: FAKE_ACCOUNT_KEY}), \
                mock.patch.object(authorization, "generate_container_sas", return_value="tok123"), \
                redirect_stdout(stdout):
            exit_code = sign_url.main(ARGS)

        self.assertEqual(exit_code, 0)
        self.assertEqual(stdout.getvalue().strip(), "https://acct1.blob.core.windows.net/zips/app.zip?tok123")

    def test_main_without_account_key(self):
        with mock.patch.dict(os.environ, {}, clear=True), \
                mock.patch.object(sign_url, "load_local_settings"):
            exit_code = sign_url.main(ARGS)

        self.assertEqual(exit_code, 1)

    def test_main_with_inverted_window(self):
        with mock.patch.dict(os.environ, {sign_url.ACCOUNT_KEY_SETTING: FAKE_ACCOUNT_KEY}), \
                mock.patch.object(authorization, "generate_container_sas") as generate:
            exit_code = sign_url.main(ARGS + ["--start", "2030-01-01", "--expiry", "2021-01-01"])

        self.assertEqual(exit_code, 1)
        generate.assert_not_called()

    def test_main_with_service_failure(self):
        with mock.patch.dict(os.environ, {sign_url.ACCOUNT_KEY_SETTING: FAKE_ACCOUNT_KEY}), \
                mock.patch.object(authorization, "generate_container_sas", side_effect=ValueError("bad key")):
            exit_code = sign_url.main(ARGS)

        self.assertEqual(exit_code, 1)


if __name__ == '__main__':
    unittest.main()
