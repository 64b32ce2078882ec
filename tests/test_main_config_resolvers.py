"""Tests for the Bower and npm descriptor resolvers."""

import logging

import pytest

from requirejs.models import PackageRef, Resolved, Unresolved, UnresolvedReason, prefix_chain
from requirejs.resolvers import BowerResolver, NpmResolver
from requirejs.resolvers.main_config import module_name, normalize_entry

LOCAL = "/webjars/"
CDN = "http://cdn.jsdelivr.net/webjars/"


class TestHelpers:
    """Module name and entry normalization."""

    @pytest.mark.parametrize("name,expected", [
        ("validate.js", "validate-js"),
        ("a.b.c", "a-b-c"),
        ("angular", "angular"),
    ])
    def test_module_name(self, name, expected):
        assert module_name(name) == expected

    @pytest.mark.parametrize("entry,expected", [
        ("./dist/lib.js", "dist/lib"),
        ("lib.js", "lib"),
        ("lib.min.js", "lib.min"),
        ("lib", "lib"),
        ("./lib", "lib"),
        ("lib.json", "lib.json"),
        ("lib.js.js", "lib.js"),
    ])
    def test_normalize_entry(self, entry, expected):
        assert normalize_entry(entry) == expected


@pytest.mark.parametrize("resolver_cls,add", [
    (BowerResolver, "add_bower"),
    (NpmResolver, "add_npm"),
])
class TestMainConfigResolvers:
    """Shared behaviour of both descriptor formats."""

    def _resolve(self, classpath, resolver_cls, webjar_id, version, chain=None):
        resolver = resolver_cls(classpath.store())
        return resolver.resolve(PackageRef(webjar_id, version), chain or prefix_chain(LOCAL))

    def test_string_main(self, classpath, resolver_cls, add):
        getattr(classpath, add)("lib", "1.0", {"name": "lib", "main": "./dist/lib.js"})
        outcome = self._resolve(classpath, resolver_cls, "lib", "1.0")
        assert isinstance(outcome, Resolved)
        assert outcome.format is resolver_cls(None).format
        assert dict(outcome.config.paths) == {"lib": ["/webjars/lib/1.0/dist/lib"]}

    def test_cdn_then_local_without_bare_path(self, classpath, resolver_cls, add):
        getattr(classpath, add)("lib", "1.0", {"name": "lib", "main": "lib.js"})
        outcome = self._resolve(classpath, resolver_cls, "lib", "1.0", prefix_chain(CDN, LOCAL))
        assert outcome.config.paths["lib"] == [CDN + "lib/1.0/lib", LOCAL + "lib/1.0/lib"]

    def test_version_flag_is_honoured(self, classpath, resolver_cls, add):
        getattr(classpath, add)("lib", "1.0", {"name": "lib", "main": "lib.js"})
        outcome = self._resolve(classpath, resolver_cls, "lib", "1.0", prefix_chain((LOCAL, False)))
        assert outcome.config.paths["lib"] == ["/webjars/lib/lib"]

    def test_array_main_uses_selector(self, classpath, resolver_cls, add):
        getattr(classpath, add)("foo", "1.0", {"name": "foo", "main": ["foo.css", "foo.min.js", "foo.js"]})
        outcome = self._resolve(classpath, resolver_cls, "foo", "1.0")
        assert outcome.config.paths["foo"] == ["/webjars/foo/1.0/foo"]

    def test_dotted_name_is_sanitized(self, classpath, resolver_cls, add):
        getattr(classpath, add)("validate.js", "0.8.0", {"name": "validate.js", "main": "validate.js"})
        outcome = self._resolve(classpath, resolver_cls, "validate.js", "0.8.0")
        assert list(outcome.config.paths) == ["validate-js"]
        assert outcome.config.paths["validate-js"] == ["/webjars/validate.js/0.8.0/validate"]

    def test_null_main_with_index_js(self, classpath, resolver_cls, add):
        getattr(classpath, add)("lib", "1.0", {"name": "lib", "main": None}, files=["index.js"])
        outcome = self._resolve(classpath, resolver_cls, "lib", "1.0")
        assert outcome.config.paths["lib"] == ["/webjars/lib/1.0/index"]

    def test_absent_main_with_index_js(self, classpath, resolver_cls, add):
        getattr(classpath, add)("lib", "1.0", {"name": "lib"}, files=["index.js"])
        assert self._resolve(classpath, resolver_cls, "lib", "1.0").config.paths["lib"][0].endswith("/index")

    def test_no_main_no_index(self, classpath, resolver_cls, add, caplog):
        getattr(classpath, add)("babel-runtime", "5.8.20", {"name": "babel-runtime"})
        with caplog.at_level(logging.WARNING):
            outcome = self._resolve(classpath, resolver_cls, "babel-runtime", "5.8.20")
        assert isinstance(outcome, Unresolved)
        assert outcome.reason is UnresolvedReason.INCOMPLETE_METADATA
        assert "babel-runtime 5.8.20" in caplog.text
        assert "no usable entry point" in caplog.text

    @pytest.mark.parametrize("main", [42, {"file": "x.js"}, [], [1, 2], "", "   "])
    def test_unusable_main(self, classpath, resolver_cls, add, main):
        getattr(classpath, add)("lib", "1.0", {"name": "lib", "main": main})
        outcome = self._resolve(classpath, resolver_cls, "lib", "1.0")
        assert outcome.reason is UnresolvedReason.INCOMPLETE_METADATA

    def test_missing_name(self, classpath, resolver_cls, add):
        getattr(classpath, add)("lib", "1.0", {"main": "lib.js"})
        assert self._resolve(classpath, resolver_cls, "lib", "1.0").reason is UnresolvedReason.INCOMPLETE_METADATA

    def test_missing_descriptor(self, classpath, resolver_cls, add):
        getattr(classpath, add)("lib", "1.0", None)
        outcome = self._resolve(classpath, resolver_cls, "lib", "1.0")
        assert outcome.reason is UnresolvedReason.MISSING_RESOURCE

    @pytest.mark.parametrize("text", ["{ name: ", "[\"lib\"]", "\"lib\""])
    def test_malformed_descriptor(self, classpath, resolver_cls, add, text):
        getattr(classpath, add)("lib", "1.0", text)
        outcome = self._resolve(classpath, resolver_cls, "lib", "1.0")
        assert outcome.reason is UnresolvedReason.MALFORMED_DESCRIPTOR

    def test_lenient_descriptor(self, classpath, resolver_cls, add):
        getattr(classpath, add)("lib", "1.0", "{ // hand edited\n name: 'lib', main: 'lib.js', }")
        assert self._resolve(classpath, resolver_cls, "lib", "1.0").config.paths["lib"] == ["/webjars/lib/1.0/lib"]

    def test_dependencies_are_ignored(self, classpath, resolver_cls, add):
        getattr(classpath, add)(
            "lib", "1.0", {"name": "lib", "main": "lib.js", "dependencies": {"jquery": ">=1.9"}}
        )
        config = self._resolve(classpath, resolver_cls, "lib", "1.0").config
        assert config.to_dict() == {"paths": {"lib": ["/webjars/lib/1.0/lib"]}}
