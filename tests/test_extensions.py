import pytest

from openapi_helpers.config import GeneratorInfo, is_prerelease, parse_version
from openapi_helpers.errors import UnsupportedGeneratorError
from openapi_helpers.extensions import (
    register_default_filters,
    register_file_upload_filter,
    register_missing_schemas_filter,
)
from openapi_helpers.filters.base import FilterRegistry
from openapi_helpers.filters.form_file import FormFileFilter
from openapi_helpers.filters.missing_schemas import MissingSchemasFilter


def _kinds(registry: FilterRegistry) -> list[type]:
    return [type(f) for f in registry.filters]


class TestParseVersion:
    def test_plain(self):
        assert parse_version("1.4.2") == (1, 4, 2)

    def test_prerelease_suffix(self):
        assert parse_version("2.0.0-rc1") == (2, 0, 0)

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_version("latest")

    def test_is_prerelease(self):
        assert is_prerelease("2.0.0-rc1")
        assert is_prerelease("2.0b2")
        assert not is_prerelease("2.0.0")
        assert not is_prerelease("2.0+local")


class TestGeneratorInfo:
    @pytest.mark.parametrize("version,expected", [
        ("1.0", False),
        ("1.9.9", False),
        ("2", True),
        ("2.0.0", True),
        ("3.1", True),
    ])
    def test_handles_semantic_types(self, version, expected):
        assert GeneratorInfo(version=version).handles_semantic_types is expected

    def test_custom_threshold(self):
        info = GeneratorInfo(version="7.0", native_semantic_types_since="8.0")
        assert info.handles_semantic_types is False

    @pytest.mark.parametrize("version,expected", [
        ("2.0.0-rc1", False),
        ("2.0a1", False),
        ("2.0.dev3", False),
        ("2.0.0+build.5", True),
        ("2.1.0-rc1", True),
        ("1.9.0-rc1", False),
    ])
    def test_prerelease_comes_before_release(self, version, expected):
        assert GeneratorInfo(version=version).handles_semantic_types is expected

    def test_invalid_version_rejected(self):
        with pytest.raises(ValueError):
            GeneratorInfo(version="next")


class TestRegistration:
    def test_register_file_upload_filter(self):
        registry = FilterRegistry()
        register_file_upload_filter(registry)
        assert _kinds(registry) == [FormFileFilter]

    def test_register_missing_schemas_filter_without_generator(self):
        registry = FilterRegistry()
        register_missing_schemas_filter(registry)
        assert _kinds(registry) == [MissingSchemasFilter]

    def test_register_missing_schemas_filter_for_old_generator(self):
        registry = FilterRegistry()
        register_missing_schemas_filter(registry, GeneratorInfo(version="1.2"))
        assert _kinds(registry) == [MissingSchemasFilter]

    def test_register_missing_schemas_filter_for_new_generator_fails(self):
        registry = FilterRegistry()
        with pytest.raises(UnsupportedGeneratorError):
            register_missing_schemas_filter(registry, GeneratorInfo(version="2.1"))
        assert len(registry) == 0

    def test_defaults_for_old_generator(self):
        registry = FilterRegistry()
        register_default_filters(registry, GeneratorInfo(version="1.0"))
        assert _kinds(registry) == [MissingSchemasFilter, FormFileFilter]

    def test_defaults_for_new_generator(self):
        registry = FilterRegistry()
        register_default_filters(registry, GeneratorInfo(version="2.0"))
        assert _kinds(registry) == [FormFileFilter]
