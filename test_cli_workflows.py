from __future__ import annotations

import base64
import contextlib
import io
import os
import tempfile
import unittest
from pathlib import Path

from pgparmor.cli import cmd_armor, cmd_clearsign_text, main
from pgparmor.constants import DEFAULT_VERSION
from pgparmor.crc24 import crc24


def _body_lines(text: str):
    lines = text.split("\n")
    blank = lines.index("")
    end = next(i for i, line in enumerate(lines) if line.startswith("="))
    return lines[blank + 1 : end]


class CliWorkflowTests(unittest.TestCase):
    def run_with_tmpdir(self, func):
        with tempfile.TemporaryDirectory() as tmp:
            func(Path(tmp))

    def test_armor_file(self):
        def scenario(tmp: Path):
            payload = b"\x99" + os.urandom(300)
            src = tmp / "key.gpg"
            src.write_bytes(payload)
            out = tmp / "key.asc"
            main(["armor", str(src), "-o", str(out), "-H", "Comment=test key", "-H", "Charset = UTF-8"])

            text = out.read_text(encoding="ascii")
            lines = text.split("\n")
            self.assertEqual(lines[0], "-----BEGIN PGP PUBLIC KEY BLOCK-----")
            self.assertEqual(lines[1], f"Version: {DEFAULT_VERSION}")
            self.assertEqual(lines[2], "Comment: test key")
            self.assertEqual(lines[3], "Charset: UTF-8")
            self.assertEqual(lines[4], "")
            self.assertEqual(base64.b64decode("".join(_body_lines(text))), payload)
            crc = base64.b64encode(crc24(payload).to_bytes(3, "big")).decode("ascii")
            self.assertIn(f"\n={crc}\n-----END PGP PUBLIC KEY BLOCK-----\n", text)

        self.run_with_tmpdir(scenario)

    def test_armor_empty_file_and_version_override(self):
        def scenario(tmp: Path):
            src = tmp / "empty.bin"
            src.write_bytes(b"")
            out = tmp / "empty.asc"
            n = cmd_armor(str(src), str(out), version="Custom 1", crlf=True)
            self.assertEqual(n, 0)
            self.assertEqual(
                out.read_bytes(),
                b"-----BEGIN PGP MESSAGE-----\r\nVersion: Custom 1\r\n\r\n\r\n=twTO\r\n-----END PGP MESSAGE-----\r\n",
            )

        self.run_with_tmpdir(scenario)

    def test_clearsign_text(self):
        def scenario(tmp: Path):
            src = tmp / "msg.txt"
            src.write_bytes(b"Dear all,\n- item\nregards -- me\n")
            out = tmp / "msg.asc"
            n = cmd_clearsign_text(str(src), "sha512", str(out))
            self.assertEqual(n, len(src.read_bytes()))
            self.assertEqual(
                out.read_bytes(),
                b"-----BEGIN PGP SIGNED MESSAGE-----\nHash: SHA512\n\nDear all,\n- - item\nregards -- me\n",
            )

        self.run_with_tmpdir(scenario)

    def test_info(self):
        def scenario(tmp: Path):
            src = tmp / "sig.bin"
            data = b"\x89\x01\x02"
            src.write_bytes(data)
            buf = io.StringIO()
            with contextlib.redirect_stdout(buf):
                main(["info", str(src)])
            out = buf.getvalue()
            self.assertIn("Bytes: 3", out)
            self.assertIn("Packet tag: 2 (old format)", out)
            self.assertIn("Label: SIGNATURE", out)
            self.assertIn(f"CRC24: {crc24(data):06X}", out)

        self.run_with_tmpdir(scenario)

    def test_errors_exit_with_status_2(self):
        def scenario(tmp: Path):
            src = tmp / "t.txt"
            src.write_bytes(b"text\n")
            cases = [
                ["clearsign-text", str(src), "--hash", "SHA3-256", "-o", str(tmp / "o.asc")],
                ["armor", str(tmp / "missing.bin"), "-o", str(tmp / "o.asc")],
                ["armor", str(src), "-o", str(tmp / "o.asc"), "-H", "no-separator"],
            ]
            for argv in cases:
                err = io.StringIO()
                with contextlib.redirect_stderr(err), self.assertRaises(SystemExit) as cm:
                    main(argv)
                self.assertEqual(cm.exception.code, 2, argv)
                self.assertTrue(err.getvalue().startswith("Error: "), argv)

        self.run_with_tmpdir(scenario)


if __name__ == "__main__":
    unittest.main()
