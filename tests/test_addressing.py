"""Unit tests for object name parsing and resolution."""

import pytest

from s3cat.addressing import ObjectAddress, resolve_name, split_s3_name
from s3cat.errors import MissingKeyError, ObjectNameError


class TestSplit:
    """Test splitting names into bucket and key."""

    def test_absolute_url(self):
        assert split_s3_name("s3://bucket/a/b.txt") == ("bucket", "a/b.txt")

    def test_bucket_only(self):
        assert split_s3_name("s3://bucket") == ("bucket", "")

    def test_bucket_with_trailing_slash(self):
        assert split_s3_name("s3://bucket/") == ("bucket", "")

    def test_relative_key(self):
        assert split_s3_name("logs/app.log") == ("", "logs/app.log")

    def test_relative_key_with_other_scheme_is_just_a_key(self):
        assert split_s3_name("gs://bucket/x") == ("", "gs://bucket/x")

    def test_empty_name(self):
        with pytest.raises(ObjectNameError, match="empty object name"):
            split_s3_name("")

    def test_scheme_without_bucket(self):
        with pytest.raises(ObjectNameError, match="missing bucket"):
            split_s3_name("s3://")

    def test_leading_slash_after_scheme(self):
        with pytest.raises(
            ObjectNameError, match="missing bucket in S3 URL: 's3:///x'"
        ):
            split_s3_name("s3:///x")


class TestResolve:
    """Test resolution against default bucket and prefix."""

    def test_absolute_ignores_defaults(self):
        addr = resolve_name("s3://other/k.txt", "bucket", "pre/")
        assert addr == ObjectAddress(bucket="other", key="k.txt")

    def test_relative_uses_default_bucket_and_prefix(self):
        addr = resolve_name("k.txt", "bucket", "pre/")
        assert addr == ObjectAddress(bucket="bucket", key="pre/k.txt")

    def test_prefix_is_joined_verbatim(self):
        addr = resolve_name("k.txt", "bucket", "pre")
        assert addr.key == "prek.txt"

    def test_relative_without_default_bucket(self):
        with pytest.raises(ObjectNameError, match="no default bucket"):
            resolve_name("k.txt")

    def test_bucket_only_is_missing_key(self):
        with pytest.raises(
            MissingKeyError, match="missing object key: 's3://bucket'"
        ):
            resolve_name("s3://bucket", "default")

    def test_str(self):
        assert str(ObjectAddress("b", "k/x")) == "s3://b/k/x"
