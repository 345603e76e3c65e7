"""
Unit tests for CloudinaryClient with the SDK patched out.
"""

import os
import unittest
from unittest.mock import patch

import cloudinary.exceptions

from poster_app.core.cloudinary_client import CloudinaryClient
from poster_app.core.config import Settings
from poster_app.core.errors import UpstreamError

UPLOAD_RESULT = {
    "asset_id": "3515c6000a548515f1134043f9785c2f",
    "public_id": "black-friday-posters/mjb8p4xaquekdxvhz2wq",
    "version": 1700000000,
    "width": 1080,
    "height": 1920,
    "format": "png",
    "resource_type": "image",
    "created_at": "2024-11-29T10:00:00Z",
    "bytes": 482311,
    "type": "upload",
    "url": "http://res.cloudinary.com/demo/image/upload/v1700000000/black-friday-posters/mjb8p4xaquekdxvhz2wq.png",
    "secure_url": "https://res.cloudinary.com/demo/image/upload/v1700000000/black-friday-posters/mjb8p4xaquekdxvhz2wq.png",
}


class TestCloudinaryClient(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(
            _env_file=None,
            CLOUDINARY_CLOUD_NAME="demo",
            CLOUDINARY_API_KEY="key",
            CLOUDINARY_API_SECRET="secret",
            LIST_MAX_RESULTS=42,
        )
        self.client = CloudinaryClient(self.settings)

    @patch("cloudinary.uploader.upload", return_value=UPLOAD_RESULT)
    def test_upload_maps_result(self, upload):
        asset = self.client.upload("public/images/base.png", folder="black-friday-posters", transformation=[{"y": 1}])

        upload.assert_called_once_with(
            "public/images/base.png",
            resource_type="image",
            folder="black-friday-posters",
            transformation=[{"y": 1}],
        )
        self.assertEqual(asset.public_id, "black-friday-posters/mjb8p4xaquekdxvhz2wq")
        self.assertEqual((asset.width, asset.height), (1080, 1920))
        self.assertEqual(asset.bytes, 482311)

    @patch("cloudinary.uploader.upload", return_value=UPLOAD_RESULT)
    def test_plain_upload_sends_no_folder_or_transformation(self, upload):
        self.client.upload("photo.png")

        upload.assert_called_once_with("photo.png", resource_type="image")

    @patch("cloudinary.uploader.upload", side_effect=ValueError("Must supply api_key"))
    def test_upload_failure_is_wrapped(self, _upload):
        with self.assertRaises(UpstreamError) as ctx:
            self.client.upload("photo.png")

        self.assertEqual(
            ctx.exception.details,
            {"operation": "upload", "upstream": "Must supply api_key", "error_type": "ValueError"},
        )
        self.assertIsInstance(ctx.exception.__cause__, ValueError)

    @patch("cloudinary.api.delete_resources", side_effect=cloudinary.exceptions.NotFound("Resource not found"))
    def test_sdk_error_class_is_kept(self, _delete):
        with self.assertRaises(UpstreamError) as ctx:
            self.client.delete(["a/b"])

        self.assertEqual(ctx.exception.details["error_type"], "NotFound")
        self.assertEqual(ctx.exception.details["upstream"], "Resource not found")

    def test_http_code_is_kept_when_present(self):
        error = cloudinary.exceptions.RateLimited("Rate Limit Exceeded")
        error.http_code = 420

        with patch("cloudinary.api.resources", side_effect=error):
            with self.assertRaises(UpstreamError) as ctx:
                self.client.list()

        self.assertEqual(ctx.exception.details["http_code"], 420)
        self.assertEqual(ctx.exception.to_dict()["code"], "UPSTREAM_ERROR")

    @patch("cloudinary.api.delete_resources", return_value={"deleted": {"a/b": "deleted"}})
    def test_delete(self, delete_resources):
        self.client.delete(["a/b"])

        delete_resources.assert_called_once_with(["a/b"])

    @patch("cloudinary.api.delete_resources", side_effect=RuntimeError("boom"))
    def test_delete_failure_is_wrapped(self, _delete):
        with self.assertRaises(UpstreamError):
            self.client.delete(["a/b"])

    @patch("cloudinary.api.resources")
    def test_list(self, resources):
        resources.return_value = {"resources": [UPLOAD_RESULT, {**UPLOAD_RESULT, "public_id": "other"}]}

        assets = self.client.list()

        resources.assert_called_once_with(type="upload", resource_type="image", max_results=42)
        self.assertEqual([a.public_id for a in assets], [UPLOAD_RESULT["public_id"], "other"])

    @patch("cloudinary.api.resources", return_value={"resources": []})
    def test_list_empty(self, _resources):
        self.assertEqual(self.client.list(), [])


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        settings = Settings(_env_file=None)

        self.assertEqual(settings.API_PREFIX, "/api")
        self.assertEqual(settings.BASE_IMAGE_PATH, "public/images/base.png")

    def test_credentials_from_environment(self):
        env = {
            "CLOUDINARY_CLOUD_NAME": "demo",
            "CLOUDINARY_API_KEY": "key",
            "CLOUDINARY_API_SECRET": "secret",
        }
        with patch.dict("os.environ", env):
            settings = Settings(_env_file=None)

        self.assertTrue(settings.has_cloudinary_credentials)

    def test_missing_secret(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings(_env_file=None, CLOUDINARY_CLOUD_NAME="demo", CLOUDINARY_API_KEY="key")

        self.assertFalse(settings.has_cloudinary_credentials)

    def test_shipped_template_is_found(self):
        settings = Settings(_env_file=None)

        self.assertIsNone(settings.base_image_problem())
        self.assertTrue(os.path.isfile(settings.base_image_source))

    def test_missing_template_is_reported(self):
        settings = Settings(_env_file=None, BASE_IMAGE_PATH="missing/base.png")

        self.assertEqual(settings.base_image_problem(), "Poster template not found: missing/base.png")

    def test_template_url_is_passed_through(self):
        url = "https://res.cloudinary.com/demo/image/upload/templates/bf.png"
        settings = Settings(_env_file=None, BASE_IMAGE_PATH=url)

        self.assertEqual(settings.base_image_source, url)
        self.assertIsNone(settings.base_image_problem())


if __name__ == "__main__":
    unittest.main()
