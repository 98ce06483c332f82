"""
Tests for the S3 listing client, using a mocked boto3 client.
"""

import os
import sys
import unittest
from unittest.mock import Mock, patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from botocore.exceptions import ClientError, EndpointConnectionError

from s3meta.errors import MetaError
from s3meta.models import MetaConfig
from s3meta.s3_client import S3Lister, client_error_message
from tests.mocks import BASE_TIME

FAULT = ('<?xml version="1.0" encoding="UTF-8"?>'
         '<Error><Code>AccessDenied</Code><Message>Access Denied</Message></Error>')


def client_error(message: str, code: str = "AccessDenied") -> ClientError:
    return ClientError({'Error': {'Code': code, 'Message': message}}, 'ListObjectsV2')


class TestS3Lister(unittest.TestCase):

    def setUp(self):
        self.client = Mock()
        self.config = MetaConfig(bucket="my-bucket", prefix="logs/", page_size=2)
        self.lister = S3Lister(self.config, client=self.client)

    def test_request_parameters(self):
        self.client.list_objects_v2.return_value = {'KeyCount': 0}

        self.lister.list_page(None)
        self.client.list_objects_v2.assert_called_with(
            Bucket="my-bucket", MaxKeys=2, Prefix="logs/")

        self.lister.list_page("token-1")
        self.client.list_objects_v2.assert_called_with(
            Bucket="my-bucket", MaxKeys=2, Prefix="logs/", ContinuationToken="token-1")

    def test_no_prefix(self):
        self.client.list_objects_v2.return_value = {}
        lister = S3Lister(MetaConfig(bucket="b"), client=self.client)

        lister.list_page()

        self.client.list_objects_v2.assert_called_with(Bucket="b", MaxKeys=1000)

    def test_page_mapping(self):
        self.client.list_objects_v2.return_value = {
            'Contents': [
                {'Key': 'logs/a.log', 'Size': 10, 'LastModified': BASE_TIME},
                {'Key': 'logs/b.log', 'Size': 20, 'LastModified': BASE_TIME},
            ],
            'KeyCount': 2,
            'IsTruncated': True,
            'NextContinuationToken': 'next',
        }

        page = self.lister.list_page()

        self.assertEqual([r.key for r in page.records], ['logs/a.log', 'logs/b.log'])
        self.assertEqual(page.records[1].size, 20)
        self.assertEqual(page.records[0].last_modified, BASE_TIME)
        self.assertEqual(page.next_token, 'next')
        self.assertEqual(page.total_count_hint, 2)
        self.assertTrue(page.is_truncated)

    def test_last_page(self):
        self.client.list_objects_v2.return_value = {'KeyCount': 0, 'IsTruncated': False}

        page = self.lister.list_page()

        self.assertEqual(page.records, [])
        self.assertFalse(page.is_truncated)

    def test_client_error(self):
        self.client.list_objects_v2.side_effect = client_error("Access Denied")

        with self.assertRaises(MetaError) as ctx:
            self.lister.list_page()

        self.assertIn("Access Denied", str(ctx.exception))
        self.assertIn("AccessDenied", str(ctx.exception))

    def test_client_error_with_raw_fault(self):
        self.client.list_objects_v2.side_effect = client_error(FAULT, code="403")

        with self.assertRaises(MetaError) as ctx:
            self.lister.list_page()

        self.assertEqual(str(ctx.exception), "Access Denied")

    def test_transport_error(self):
        self.client.list_objects_v2.side_effect = EndpointConnectionError(
            endpoint_url="https://s3.example.com")

        with self.assertRaises(MetaError) as ctx:
            self.lister.list_page()

        self.assertIn("https://s3.example.com", str(ctx.exception))

    def test_log_callback(self):
        lines = []
        self.client.list_objects_v2.return_value = {'KeyCount': 0}
        lister = S3Lister(self.config, client=self.client, log_callback=lines.append)

        lister.list_page()

        self.assertEqual(len(lines), 1)
        self.assertIn("list_objects_v2 #1", lines[0])

    @patch('s3meta.s3_client.boto3')
    def test_client_created_from_config(self, mock_boto3):
        config = MetaConfig(bucket="b", region="eu-west-1", profile="dev",
                            endpoint_url="http://localhost:9000")

        S3Lister(config)

        mock_boto3.session.Session.assert_called_once_with(
            profile_name="dev", region_name="eu-west-1")
        session = mock_boto3.session.Session.return_value
        args, kwargs = session.client.call_args
        self.assertEqual(args, ("s3",))
        self.assertEqual(kwargs['endpoint_url'], "http://localhost:9000")


class TestClientErrorMessage(unittest.TestCase):

    def test_plain(self):
        message = client_error_message(client_error("Access Denied"))
        self.assertTrue(message.endswith("Access Denied"))

    def test_fault(self):
        self.assertEqual(client_error_message(client_error(FAULT)), "Access Denied")


if __name__ == '__main__':
    unittest.main()
