"""Shared fixtures: a fake webjar classpath built under ``tmp_path``."""

import json
import os
import zipfile
from xml.sax.saxutils import escape

import pytest

from constants import Constants
from locator import ResourceStore

_POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
    <modelVersion>4.0.0</modelVersion>
    <groupId>{group}</groupId>
    <artifactId>{artifact}</artifactId>
    <version>{version}</version>
    {properties}
</project>
"""


def make_pom(group, artifact, version, requirejs=None):
    """Return a minimal pom.xml, with a ``<requirejs>`` property when given."""
    properties = ""
    if requirejs is not None:
        properties = f"<properties><requirejs>{escape(requirejs)}</requirejs></properties>"
    return _POM_TEMPLATE.format(
        group=group, artifact=artifact, version=version, properties=properties
    )


class WebJarClasspath:
    """Writes webjar layouts into a directory acting as one classpath root."""

    def __init__(self, root):
        self.root = root

    def add_file(self, path, content):
        full = os.path.join(str(self.root), *path.split("/"))
        os.makedirs(os.path.dirname(full), exist_ok=True)
        mode = "wb" if isinstance(content, bytes) else "w"
        kwargs = {} if isinstance(content, bytes) else {"encoding": "utf-8"}
        with open(full, mode, **kwargs) as fh:
            fh.write(content)
        return full

    def asset(self, webjar_id, version, filename, content="// asset\n"):
        return self.add_file(
            f"{Constants.WEBJARS_PATH_PREFIX}/{webjar_id}/{version}/{filename}", content
        )

    def add_legacy(self, webjar_id, version, requirejs=None, legacy_script=None, pom=None):
        """Classic webjar: config in the pom ``<requirejs>`` property."""
        self.add_file(
            f"{Constants.WEBJARS_MAVEN_PREFIX}/{webjar_id}/pom.xml",
            pom if pom is not None else make_pom("org.webjars", webjar_id, version, requirejs),
        )
        self.asset(webjar_id, version, f"{webjar_id}.js")
        if legacy_script is not None:
            self.asset(webjar_id, version, Constants.LEGACY_SCRIPT_FILE, legacy_script)

    def _add_described(self, prefix, group, filename, webjar_id, version, descriptor, files):
        self.add_file(f"{prefix}/{webjar_id}/pom.xml", make_pom(group, webjar_id, version))
        if descriptor is not None:
            text = descriptor if isinstance(descriptor, str) else json.dumps(descriptor)
            self.asset(webjar_id, version, filename, text)
        for name in files:
            self.asset(webjar_id, version, name)

    def add_bower(self, webjar_id, version, descriptor, files=()):
        """Bower webjar with ``bower.json`` (dict or raw text; None for missing)."""
        self._add_described(
            Constants.WEBJARS_MAVEN_BOWER_PREFIX, "org.webjars.bower",
            Constants.BOWER_JSON_FILE, webjar_id, version, descriptor, files,
        )
        if descriptor is None and not files:
            self.asset(webjar_id, version, "README.md", "readme")

    def add_npm(self, webjar_id, version, descriptor, files=()):
        """npm webjar with ``package.json`` (dict or raw text; None for missing)."""
        self._add_described(
            Constants.WEBJARS_MAVEN_NPM_PREFIX, "org.webjars.npm",
            Constants.PACKAGE_JSON_FILE, webjar_id, version, descriptor, files,
        )
        if descriptor is None and not files:
            self.asset(webjar_id, version, "README.md", "readme")

    def store(self):
        return ResourceStore.from_paths([str(self.root)])

    def zip_to(self, archive_path):
        """Pack the whole root into a jar at ``archive_path``."""
        with zipfile.ZipFile(archive_path, "w") as zf:
            for dirpath, _dirnames, filenames in os.walk(str(self.root)):
                for filename in filenames:
                    full = os.path.join(dirpath, filename)
                    zf.write(full, os.path.relpath(full, str(self.root)).replace(os.sep, "/"))
        return archive_path


@pytest.fixture
def classpath(tmp_path):
    """An empty classpath directory."""
    root = tmp_path / "classpath"
    root.mkdir()
    return WebJarClasspath(root)


@pytest.fixture
def sample_classpath(classpath):
    """Classpath mirroring a typical mix of classic, Bower and npm webjars."""
    classpath.add_legacy(
        "jquery", "2.1.0",
        requirejs="{ paths: { 'jquery': 'jquery' }, shim: { 'jquery': { 'exports': '$' } } }",
    )
    classpath.add_legacy(
        "bootstrap", "3.1.1",
        requirejs="{ paths: { 'bootstrap': 'js/bootstrap' }, shim: { 'bootstrap': [ 'jquery' ] } }",
    )
    classpath.add_legacy(
        "when-node", "3.5.2",
        requirejs="{ packages: [ { 'name': 'when', 'location': 'when', 'main': 'when' } ] }",
    )
    classpath.add_legacy(
        "requirejs", "2.1.10",
        legacy_script="requirejs.config({\r\n    paths: { 'requirejs': webjars.path('requirejs', 'require') }\r\n});",
    )
    classpath.add_bower(
        "angular-bootstrap", "0.13.0",
        {"name": "angular-bootstrap", "main": ["./ui-bootstrap-tpls.js"]},
    )
    classpath.add_bower(
        "angular-schema-form", "0.8.2",
        {
            "name": "angular-schema-form",
            "main": ["dist/schema-form.js", "dist/bootstrap-decorator.js"],
        },
    )
    classpath.add_npm(
        "angular-pouchdb", "2.0.8",
        {"name": "angular-pouchdb", "main": "dist/angular-pouchdb.js"},
    )
    classpath.add_npm("validate.js", "0.8.0", {"name": "validate.js", "main": "validate.js"})
    classpath.add_npm("babel-runtime", "5.8.20", {"name": "babel-runtime"})
    return classpath
