"""Locate the DiGraph a CLI command works on.

A graph lives in a module-level variable of either a Python script
(``graphs/roads.py``) or an importable module (``examples.roads:graph``).
Both the command-line argument and the ``[tool.wdigraph]`` section of
``pyproject.toml`` resolve to a :class:`GraphTarget`.
"""

import importlib
import importlib.util
import logging
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from types import ModuleType

from wdigraph._graph import DiGraph

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Error in the [tool.wdigraph] section of pyproject.toml."""


@dataclass(frozen=True, slots=True)
class GraphTarget:
    """Where a graph is defined.

    Exactly one of ``script`` and ``module`` is set. ``name`` selects the
    variable; when it is None the module must hold exactly one DiGraph.
    """

    script: Path | None = None
    module: str | None = None
    name: str | None = None

    def __str__(self) -> str:
        where = str(self.script) if self.script is not None else str(self.module)
        return f"{where}:{self.name}" if self.name else where


@dataclass(frozen=True, slots=True)
class WdigraphConfig:
    """The [tool.wdigraph] settings: which graph to load and the default source node."""

    graph: GraphTarget | None = None
    source: str | None = None


def parse_target(value: str, name: str | None = None) -> GraphTarget:
    """Parse a ``script.py[:var]`` or ``module.path:var`` string.

    Args:
        value: The string given on the command line or in config.
        name: Variable name that overrides the one embedded in ``value``.

    Raises:
        ValueError: If a module path has no ``:variable`` part.

    """
    location, _, embedded = value.partition(":")
    if location.endswith(".py"):
        return GraphTarget(script=Path(location), name=name or embedded or None)
    if not embedded:
        msg = f"Invalid graph location '{value}'. Expected 'script.py' or 'module.path:variable_name'"
        raise ValueError(msg)
    return GraphTarget(module=location, name=name or embedded)


def load_config(pyproject_path: Path) -> WdigraphConfig:
    """Read [tool.wdigraph] from a pyproject.toml file.

    ``graph`` is either a location string (see :func:`parse_target`) or a
    ``{ script = "...", name = "..." }`` table. Script paths are relative to
    the directory holding ``pyproject.toml``. ``source`` is the default
    shortest-path source label.

    Raises:
        ConfigError: If the file is not valid TOML or a value has the wrong shape.

    """
    try:
        data = tomllib.loads(pyproject_path.read_text())
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {pyproject_path}: {e}"
        raise ConfigError(msg) from e

    section = data.get("tool", {}).get("wdigraph", {})
    root = pyproject_path.parent

    graph: GraphTarget | None = None
    match section.get("graph"):
        case None:
            pass
        case str(location):
            try:
                graph = parse_target(location)
            except ValueError as e:
                raise ConfigError(str(e)) from e
        case {"script": str(script), **rest} if set(rest) <= {"name"}:
            name = rest.get("name")
            if name is not None and not isinstance(name, str):
                msg = "[tool.wdigraph].graph.name must be a string"
                raise ConfigError(msg)
            graph = GraphTarget(script=Path(script), name=name)
        case other:
            msg = f"[tool.wdigraph].graph must be a location string or a {{script, name}} table, got {other!r}"
            raise ConfigError(msg)

    if graph is not None and graph.script is not None and not graph.script.is_absolute():
        graph = replace(graph, script=root / graph.script)

    source = section.get("source")
    if source is not None and not isinstance(source, str):
        msg = "[tool.wdigraph].source must be a node label string"
        raise ConfigError(msg)

    return WdigraphConfig(graph=graph, source=source)


def config_from_directory(directory: Path | None = None) -> WdigraphConfig:
    """Load config from ``pyproject.toml`` in ``directory`` (the working directory by default)."""
    pyproject_path = (directory or Path.cwd()) / "pyproject.toml"
    if not pyproject_path.is_file():
        return WdigraphConfig()
    return load_config(pyproject_path)


def _import_script(script: Path) -> ModuleType:
    if not script.is_file():
        msg = f"Graph script not found: {script}"
        raise ValueError(msg)
    spec = importlib.util.spec_from_file_location(f"_wdigraph_script_{script.stem}", script)
    if spec is None or spec.loader is None:
        msg = f"Cannot load {script} as a Python module"
        raise ValueError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def load_graph(target: GraphTarget) -> DiGraph:
    """Import the script or module of ``target`` and return its DiGraph.

    Raises:
        ValueError: If the script is missing, the named variable does not
            exist, or no unique DiGraph can be picked without a name.
        TypeError: If the named variable is not a DiGraph.

    """
    if target.script is not None:
        module = _import_script(target.script)
    else:
        module = importlib.import_module(str(target.module))

    if target.name is not None:
        if not hasattr(module, target.name):
            msg = f"No variable '{target.name}' in {target}"
            raise ValueError(msg)
        graph = getattr(module, target.name)
        if not isinstance(graph, DiGraph):
            msg = f"'{target.name}' in {target} is a {type(graph).__name__}, not a DiGraph"
            raise TypeError(msg)
        return graph

    graphs = {name: obj for name, obj in vars(module).items() if isinstance(obj, DiGraph)}
    if not graphs:
        msg = f"No DiGraph found in {target}"
        raise ValueError(msg)
    if len(graphs) > 1:
        msg = f"Several graphs in {target} ({', '.join(graphs)}); pick one with --graph"
        raise ValueError(msg)

    name, graph = graphs.popitem()
    logger.debug(f"Using graph '{name}' from {target}: {graph!r}")
    return graph
