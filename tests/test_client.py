import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from hubsend import cli
from hubsend.client import submit_cast, submit_message
from hubsend.codec import decode_message
from hubsend.config import SubmitConfig
from hubsend.envelope import verify_message
from hubsend.errors import ConfigError, InvalidKeyLength, InvalidTimestamp, NonSuccessStatus
from hubsend.fctime import FARCASTER_EPOCH
from hubsend.schema import FarcasterNetwork, MessageType
from hubsend.submitter import MessageSubmitter

# RFC 8032 TEST 1 key pair
SEED = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
PUB = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
TIMESTAMP = 86400
NOW = FARCASTER_EPOCH + TIMESTAMP

# MessageData{type=CAST_ADD, fid=6833, timestamp=86400, network=MAINNET,
#             cast_add_body{text="Welcome to Go!"}}
GOLDEN_DATA = bytes.fromhex(
    "0801"  # type = 1
    "10b135"  # fid = 6833
    "1880a305"  # timestamp = 86400
    "2001"  # network = 1
    "2a10"  # cast_add_body, 16 bytes
    "220e" + "Welcome to Go!".encode().hex()  # text
)

# BLAKE3(GOLDEN_DATA) truncated to 20 bytes
GOLDEN_HASH = bytes.fromhex("973b4da2f57f210ebcdf674ec135f0974bc86dee")

# Message{hash, hash_scheme=BLAKE3, signature, signature_scheme=ED25519, signer, data_bytes}
GOLDEN_ENVELOPE = bytes.fromhex(
    "1214" "973b4da2f57f210ebcdf674ec135f0974bc86dee"  # hash
    "1801"  # hash_scheme = BLAKE3
    "2240"  # signature, 64 bytes
    "cd36342f9765522635ef24a5c6ed36badbe7552d97f34be1bedafe7ce6fc4ad0"
    "9dded58437d74a209ae8167b38dc5a5a7f2ce3f4ba5e4c850d8c32f9722d3c03"
    "2801"  # signature_scheme = ED25519
    "3220" + PUB  # signer
    + "3a1d" + GOLDEN_DATA.hex()  # data_bytes, 29 bytes
)


class RecordingSubmitter(MessageSubmitter):
    def __init__(self, status=200):
        self.status = status
        self.sent = []

    def submit(self, envelope: bytes) -> int:
        self.sent.append(envelope)
        if self.status != 200:
            raise NonSuccessStatus(self.status)
        return self.status


class TestSubmitCast(unittest.TestCase):
    def setUp(self):
        self.config = SubmitConfig(seed=SEED, fid=6833, network=FarcasterNetwork.MAINNET)

    def test_golden_envelope(self):
        fake = RecordingSubmitter()
        result = submit_cast("Welcome to Go!", self.config, submitter=fake, now=NOW)
        self.assertEqual(result.status, 200)
        self.assertEqual(fake.sent, [GOLDEN_ENVELOPE])
        self.assertEqual(result.envelope, GOLDEN_ENVELOPE)

    def test_submitted_bytes_verify(self):
        fake = RecordingSubmitter()
        result = submit_cast("Welcome to Go!", self.config, submitter=fake, now=NOW)
        data = verify_message(decode_message(fake.sent[0]))
        self.assertEqual(data.type, MessageType.CAST_ADD)
        self.assertEqual(data.timestamp, TIMESTAMP)
        self.assertEqual(result.hash_hex, "0x" + decode_message(fake.sent[0]).hash.hex())
        self.assertEqual(result.hash, GOLDEN_HASH)

    def test_dry_run_sends_nothing(self):
        fake = RecordingSubmitter()
        result = submit_cast("Welcome to Go!", self.config, submitter=fake, now=NOW, dry_run=True)
        self.assertIsNone(result.status)
        self.assertEqual(fake.sent, [])
        self.assertEqual(result.envelope, GOLDEN_ENVELOPE)

    def test_non_success_status_propagates(self):
        with self.assertRaises(NonSuccessStatus) as ctx:
            submit_cast("gm", self.config, submitter=RecordingSubmitter(status=400), now=NOW)
        self.assertEqual(ctx.exception.status, 400)

    def test_placeholder_seed_rejected(self):
        fake = RecordingSubmitter()
        with self.assertRaises(ConfigError):
            submit_cast("gm", SubmitConfig(), submitter=fake, now=NOW)
        self.assertEqual(fake.sent, [])

    def test_placeholder_seed_rejected_in_any_spelling(self):
        spellings = [
            ("00" * 32, "hex"),
            ("0X" + "00" * 32, "hex"),
            ("AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA=", "base64"),
        ]
        for seed, encoding in spellings:
            with self.subTest(seed=seed):
                config = SubmitConfig(seed=seed, seed_encoding=encoding)
                self.assertTrue(config.has_placeholder_seed())
                fake = RecordingSubmitter()
                with self.assertRaises(ConfigError) as ctx:
                    submit_cast("gm", config, submitter=fake, now=NOW)
                self.assertEqual(ctx.exception.reason, "placeholder_seed")
                with self.assertRaises(ConfigError):
                    submit_cast("gm", config, now=NOW, dry_run=True)
                self.assertEqual(fake.sent, [])

    def test_short_seed_rejected_before_signing(self):
        fake = RecordingSubmitter()
        with self.assertRaises(InvalidKeyLength):
            submit_cast("gm", SubmitConfig(seed="11" * 31), submitter=fake, now=NOW)
        self.assertEqual(fake.sent, [])

    def test_time_before_epoch_rejected(self):
        fake = RecordingSubmitter()
        with self.assertRaises(InvalidTimestamp):
            submit_cast("gm", self.config, submitter=fake, now=FARCASTER_EPOCH - 60)
        self.assertEqual(fake.sent, [])

    def test_submit_message_without_submitter(self):
        from hubsend.builders import make_cast_add_data
        from hubsend.signer import Ed25519Signer

        data = make_cast_add_data("Welcome to Go!", 6833, FarcasterNetwork.MAINNET, TIMESTAMP)
        result = submit_message(data, Ed25519Signer.from_seed_text(SEED), None)
        self.assertEqual(result.envelope, GOLDEN_ENVELOPE)


class TestCli(unittest.TestCase):
    def _run(self, argv, env):
        out, err = io.StringIO(), io.StringIO()
        with mock.patch.dict("os.environ", env, clear=True), redirect_stdout(out), redirect_stderr(err):
            code = cli.main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_dry_run_prints_envelope(self):
        with mock.patch("hubsend.client.get_farcaster_time", return_value=TIMESTAMP):
            code, out, _ = self._run(["--dry-run", "Welcome to Go!"], {"HUBSEND_SEED": SEED})
        self.assertEqual(code, 0)
        self.assertIn(GOLDEN_ENVELOPE.hex(), out)

    def test_placeholder_seed_fails_fast(self):
        code, _, err = self._run(["gm"], {})
        self.assertEqual(code, 1)
        self.assertIn("placeholder_seed", err)

    def test_rejected_status_exits_nonzero(self):
        fake = RecordingSubmitter(status=503)
        with mock.patch("hubsend.client.HttpSubmitter", return_value=fake):
            code, _, err = self._run(["gm"], {"HUBSEND_SEED": SEED})
        self.assertEqual(code, 1)
        self.assertIn("HTTP 503", err)
        self.assertEqual(len(fake.sent), 1)

    def test_zero_timeout_flag_means_none(self):
        fake = RecordingSubmitter()
        with mock.patch("hubsend.client.HttpSubmitter", return_value=fake) as factory:
            code, _, _ = self._run(["--timeout", "0", "gm"], {"HUBSEND_SEED": SEED})
        self.assertEqual(code, 0)
        self.assertIsNone(factory.call_args.kwargs["timeout"])


if __name__ == "__main__":
    unittest.main()
