"""Rendering of the RequireJS setup script.

The script defines two globals consumed by the page:

* ``webjars``: the installed versions plus a deprecated ``path()`` helper
  returning the candidate URLs of a file inside a webjar;
* ``require``: the RequireJS bootstrap object whose ``callback`` registers
  the deprecated ``webjars!`` loader plugin and then applies every webjar's
  config.
"""

from __future__ import annotations

import json
import textwrap
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Sequence

from .models import PrefixSpec

COMPACT_SEPARATORS = (",", ":")


def compact_json(value) -> str:
    """JSON text without insignificant whitespace."""
    return json.dumps(value, separators=COMPACT_SEPARATORS)


@dataclass(frozen=True)
class WebJarVersion:
    id: str
    version: str


@dataclass(frozen=True)
class WebJarPath:
    """One prefix of the ``webjars.path()`` helper.

    ``comma`` is False only for the last prefix of the list.
    """
    prefix: str
    include_version: bool = True
    comma: bool = True


@dataclass
class RenderContext:
    versions: List[WebJarVersion] = field(default_factory=list)
    prefixes: List[WebJarPath] = field(default_factory=list)
    configs: str = ""


def build_context(
    versions: Mapping[str, str],
    prefixes: Sequence[PrefixSpec],
    configs: Iterable[str],
) -> RenderContext:
    """Assemble a RenderContext from registry versions and config blocks."""
    last = len(prefixes) - 1
    return RenderContext(
        versions=[WebJarVersion(webjar_id, version) for webjar_id, version in versions.items()],
        prefixes=[
            WebJarPath(spec.location_prefix, spec.include_version, index != last)
            for index, spec in enumerate(prefixes)
        ],
        configs="".join(configs),
    )


_SETUP_SCRIPT_TEMPLATE = textwrap.dedent("""\
    var webjars = {{
        versions: {versions},
        path: function(webJarId, path) {{
            console.error('The webjars.path() method of getting a WebJar path has been deprecated.  The RequireJS config in the ' + webJarId + ' WebJar may need to be updated.  Please file an issue: http://github.com/webjars/' + webJarId + '/issues/new');
            return [{paths}];
        }}
    }};

    var require = {{
        callback: function() {{
            // Deprecated WebJars RequireJS plugin loader
            define('webjars', function() {{
                return {{
                    load: function(name, req, onload, config) {{
                        if (name.indexOf('.js') >= 0) {{
                            console.warn('Detected a legacy file name (' + name + ') as the thing to load.  Loading via file name is no longer supported so the .js will be dropped in an effort to resolve the module name instead.');
                            name = name.replace('.js', '');
                        }}
                        console.error('The webjars plugin loader (e.g. webjars!' + name + ') has been deprecated.  The RequireJS config in the ' + name + ' WebJar may need to be updated.  Please file an issue: http://github.com/webjars/webjars/issues/new');
                        req([name], function() {{
                            onload();
                        }});
                    }}
                }}
            }});

            // All of the WebJar configs
    {configs}
        }}
    }};""")


def _path_expression(path: WebJarPath) -> str:
    expression = json.dumps(path.prefix) + " + webJarId + '/' + "
    if path.include_version:
        expression += "webjars.versions[webJarId] + '/' + "
    expression += "path"
    if path.comma:
        expression += ",\n" + " " * 12
    return expression


def render_setup_script(context: RenderContext) -> str:
    """Render ``context`` into the setup script."""
    versions = compact_json({item.id: item.version for item in context.versions})
    paths = "".join(_path_expression(path) for path in context.prefixes)
    return _SETUP_SCRIPT_TEMPLATE.format(
        versions=versions,
        paths=paths,
        configs=context.configs,
    )
