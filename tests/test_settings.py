import os
import unittest
from datetime import datetime, timezone
from unittest import mock

from pydantic import ValidationError

from awssig4 import AccessControlList, Service, SigV4Signer
from awssig4.settings import SignerSettings

ENV = {
    'AWS_ACCESS_KEY_ID': 'AKIDEXAMPLE',
    'AWS_SECRET_ACCESS_KEY': 'wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY',
    'AWS_REGION': 'eu-central-1',
}


class TestSignerSettings(unittest.TestCase):

    @mock.patch.dict(os.environ, ENV, clear=True)
    def test_reads_standard_variables(self) -> None:
        config = SignerSettings().to_config(Service.S3, 'bucket.example.com')

        self.assertEqual(config.access_key, 'AKIDEXAMPLE')
        self.assertEqual(config.secret_key, ENV['AWS_SECRET_ACCESS_KEY'])
        self.assertEqual(config.region, 'eu-central-1')
        self.assertEqual(config.service, 's3')
        self.assertIsNone(config.token)

    @mock.patch.dict(os.environ, {**ENV, 'AWS_SESSION_TOKEN': 'tok', 'AWSSIG4_CONTENT_TYPE': 'application/json'},
                     clear=True)
    def test_token_and_content_type(self) -> None:
        config = SignerSettings().to_config('sts', 'sts.amazonaws.com')

        self.assertEqual(config.token, 'tok')
        self.assertEqual(config.content_type, 'application/json')

    @mock.patch.dict(os.environ, {**ENV, 'AWS_SESSION_TOKEN': ''}, clear=True)
    def test_blank_token_ignored(self) -> None:
        self.assertIsNone(SignerSettings().session_token)

    @mock.patch.dict(os.environ, {k: v for k, v in ENV.items() if k != 'AWS_REGION'}, clear=True)
    def test_region_defaults(self) -> None:
        self.assertEqual(SignerSettings().region, 'us-east-1')

    @mock.patch.dict(
        os.environ,
        {**{k: v for k, v in ENV.items() if k != 'AWS_REGION'}, 'AWS_DEFAULT_REGION': 'ap-south-1'},
        clear=True,
    )
    def test_default_region_variable(self) -> None:
        self.assertEqual(SignerSettings().region, 'ap-south-1')

    @mock.patch.dict(os.environ, {'AWS_REGION': 'us-east-1'}, clear=True)
    def test_missing_credentials(self) -> None:
        with self.assertRaises(ValidationError):
            SignerSettings()

    @mock.patch.dict(os.environ, ENV, clear=True)
    def test_secret_hidden_in_repr(self) -> None:
        self.assertNotIn(ENV['AWS_SECRET_ACCESS_KEY'], repr(SignerSettings()))

    @mock.patch.dict(os.environ, ENV, clear=True)
    def test_signer_from_environment(self) -> None:
        clock = lambda: datetime(2023, 12, 15, tzinfo=timezone.utc)  # noqa: E731
        signer = SigV4Signer.from_environment(Service.S3, 'bucket.example.com', clock=clock)
        direct = SigV4Signer(Service.S3, 'bucket.example.com', 'eu-central-1', ENV['AWS_ACCESS_KEY_ID'],
                             ENV['AWS_SECRET_ACCESS_KEY'], clock=clock)

        self.assertEqual(signer.sign(path='/k'), direct.sign(path='/k'))


class TestAccessControlList(unittest.TestCase):

    def test_values(self) -> None:
        self.assertEqual(
            [acl.value for acl in AccessControlList],
            [
                'private',
                'public-read',
                'public-read-write',
                'aws-exec-read',
                'authenticated-read',
                'bucket-owner-read',
                'bucket-owner-full-control',
            ]
        )

    def test_header_is_signed_and_passed_through(self) -> None:
        signer = SigV4Signer(Service.S3, 'bucket.example.com', 'us-east-1', 'AKID', 'secret',
                             clock=lambda: datetime(2023, 12, 15, tzinfo=timezone.utc))
        headers = signer.sign(path='/k', method='PUT', headers=AccessControlList.PUBLIC_READ.header())
        form = signer.canonicalize(path='/k', method='PUT', headers=AccessControlList.PUBLIC_READ.header())

        self.assertEqual(headers['x-amz-acl'], 'public-read')
        self.assertIn('x-amz-acl:public-read\n', form.canonical_request)


if __name__ == '__main__':
    unittest.main(verbosity=2)
