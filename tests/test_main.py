"""
Tests for the mimeparser-inspect command line front end
"""

import io
import logging

import pytest

from mimeparser.main import MimeInspector, main
from mimeparser.modules.errors import MalformedHeaderField

MESSAGE = (
    "From: sender@example.com\r\n"
    'Content-Type: multipart/mixed; boundary="b1"\r\n'
    "\r\n"
    "--b1\r\n"
    "Content-Type: text/plain; charset=utf-8\r\n"
    "Content-Transfer-Encoding: quoted-printable\r\n"
    "\r\n"
    "Caf=C3=A9\r\n"
    "second line\r\n"
    "--b1\r\n"
    "Content-Type: application/octet-stream\r\n"
    "Content-Transfer-Encoding: base64\r\n"
    'Content-Disposition: attachment; filename="data.bin"\r\n'
    "\r\n"
    "AAEC\r\n"
    "--b1\r\n"
    "Content-Type: text/plain; charset=x-bogus\r\n"
    "\r\n"
    "undecodable\r\n"
    "--b1--\r\n"
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def env_file(tmp_path):
    return str(tmp_path / "missing.env")


@pytest.fixture
def message_file(tmp_path):
    path = tmp_path / "message.eml"
    path.write_bytes(MESSAGE.encode("latin-1"))
    return path


class TestMimeInspector:

    def test_renders_tree(self, clean_env, env_file, message_file):
        inspector = MimeInspector(env_file, use_color=False)
        out = io.StringIO()
        mime = inspector.inspect(message_file, out=out)

        lines = out.getvalue().splitlines()
        assert len(mime.children) == 3
        assert lines[0] == "multipart/mixed [3 parts]"
        assert lines[1].startswith("  text/plain [quoted-printable, ")
        assert lines[2] == '  application/octet-stream attachment "data.bin" [base64, 4 chars]'
        assert lines[3] == "  text/plain [7bit, 11 chars]"

    def test_decode_prints_text_parts(self, clean_env, env_file, message_file):
        inspector = MimeInspector(env_file, use_color=False)
        out = io.StringIO()
        inspector.inspect(message_file, decode=True, out=out)

        text = out.getvalue()
        assert "    | Café" in text
        assert "    | second line" in text
        # Non-text parts are never dumped; decode failures are shown inline
        assert "AAEC" not in text
        assert "<Unknown charset 'x-bogus'>" in text

    def test_default_content_type_label(self, clean_env, env_file, tmp_path):
        path = tmp_path / "plain.eml"
        path.write_text("Subject: hi\r\n\r\nbody")
        out = io.StringIO()
        MimeInspector(env_file, use_color=False).inspect(path, out=out)
        assert out.getvalue() == "text/plain (default) [7bit, 4 chars]\n"

    def test_color_output(self, clean_env, env_file, message_file):
        out = io.StringIO()
        MimeInspector(env_file, use_color=True).inspect(message_file, out=out)
        assert "\033[35mmultipart/mixed\033[0m" in out.getvalue()

    def test_limits_come_from_config(self, clean_env, env_file, message_file):
        clean_env.setenv("MIMEPARSER_MAX_PARTS", "2")
        inspector = MimeInspector(env_file, use_color=False)
        assert inspector.parser.limits.max_parts == 2

    def test_eight_bit_quoted_printable_bytes_survive(self, clean_env, env_file, tmp_path):
        path = tmp_path / "latin1.eml"
        path.write_bytes(
            b"Content-Type: text/plain; charset=iso-8859-1\r\n"
            b"Content-Transfer-Encoding: quoted-printable\r\n"
            b"\r\n"
            b"caf\xe9 =E9t=E9\r\n"
        )
        mime = MimeInspector(env_file, use_color=False).inspect(path, out=io.StringIO())
        assert mime.decoded_content_bytes() == b"caf\xe9 \xe9t\xe9\r\n"
        assert mime.decoded_content_text() == "caf\u00e9 \u00e9t\u00e9\r\n"

    def test_parse_errors_propagate(self, clean_env, env_file, tmp_path):
        path = tmp_path / "bad.eml"
        path.write_text("Content-Type: text\r\n\r\nbody")
        with pytest.raises(MalformedHeaderField):
            MimeInspector(env_file, use_color=False).inspect(path, out=io.StringIO())


class TestMain:

    def test_success(self, clean_env, env_file, message_file, capsys):
        assert main([str(message_file), "--env", env_file]) == 0
        assert "multipart/mixed [3 parts]" in capsys.readouterr().out

    def test_missing_file(self, clean_env, env_file, tmp_path):
        assert main([str(tmp_path / "nope.eml"), "--env", env_file]) == 1

    def test_malformed_message(self, clean_env, env_file, tmp_path):
        path = tmp_path / "bad.eml"
        path.write_text("Content-Type: text\r\n\r\nbody")
        assert main([str(path), "--env", env_file]) == 1

    def test_limit_exceeded(self, clean_env, env_file, message_file):
        clean_env.setenv("MIMEPARSER_MAX_PARTS", "2")
        assert main([str(message_file), "--env", env_file]) == 1

    def test_configuration_error(self, clean_env, env_file, message_file, capsys):
        clean_env.setenv("MIMEPARSER_MAX_DEPTH", "0")
        assert main([str(message_file), "--env", env_file]) == 2
        assert "Configuration error" in capsys.readouterr().err
