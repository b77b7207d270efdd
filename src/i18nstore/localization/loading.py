"""Resource loading infrastructure for Translator.

Provides the protocol for dictionary backends, the filesystem implementation
and the descriptor recorded for every discovered resource file.

Components:
    Backend - Protocol for loading a complete dictionary (structural typing)
    ResourceFile - Immutable descriptor of one discovered resource file
    FileSystemBackend - Glob-based loader for JSON and YAML resources
    parse_resource - Parse one resource file by extension

Loading is all-or-nothing: any syntax or I/O error aborts the load and no
partial dictionary is returned.

Python 3.13+.
"""

from __future__ import annotations

import glob
import json
import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

import yaml

from i18nstore.constants import DEFAULT_NAMESPACE
from i18nstore.enums import ResourceFormat
from i18nstore.errors import ResourceSyntaxError, UnknownFormatError
from i18nstore.localization.discovery import resolve_base_dirs
from i18nstore.localization.merge import deep_merge, nest_namespace

if TYPE_CHECKING:
    from i18nstore.config import TranslatorConfig
    from i18nstore.localization.types import Dictionary

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "Backend",
    # Concrete backend
    "FileSystemBackend",
    # Descriptors and helpers
    "ResourceFile",
    "parse_resource",
    "sort_key",
]

logger = logging.getLogger(__name__)


class Backend(Protocol):
    """Protocol for loading the complete translation dictionary.

    Implementations receive the translator configuration and return a
    dictionary keyed by language. They either return the complete result or
    raise; a partial dictionary must never be returned.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom backends.

    Example:
        >>> class StaticBackend:
        ...     def load(self, config: TranslatorConfig) -> Dictionary:
        ...         return {"en": {"hello": "Hello"}}
        ...
        >>> translator = Translator(backend=StaticBackend())
    """

    def load(self, config: TranslatorConfig) -> Dictionary:
        """Load and merge every resource described by config.

        Args:
            config: Translator configuration

        Returns:
            Dictionary mapping language codes to nested resource trees

        Raises:
            ResourceSyntaxError: If a resource cannot be parsed
            OSError: If a resource cannot be read
        """
        ...


@dataclass(frozen=True, slots=True)
class ResourceFile:
    """A discovered resource file.

    Attributes:
        filename: Absolute path of the file
        directory: Base directory the file was discovered under
        language: Language captured from the path
        namespace: Namespace captured from the path ("default" for the root)
        extension: File extension without the dot
    """

    filename: str
    directory: str
    language: str
    namespace: str
    extension: str

    @property
    def is_default_namespace(self) -> bool:
        """Check if content merges at the language root."""
        return self.namespace == DEFAULT_NAMESPACE


def sort_key(resource: ResourceFile) -> tuple[str, bool, str, str]:
    """Merge order within one base directory.

    Language first, then namespace with "default" ahead of every other
    namespace, then extension. Later files win when merged.
    """
    return (
        resource.language,
        not resource.is_default_namespace,
        resource.namespace,
        resource.extension,
    )


_YAML_STR_TAG = "tag:yaml.org,2002:str"
_YAML_MERGE_TAG = "tag:yaml.org,2002:merge"


class _ResourceYamlLoader(yaml.SafeLoader):
    """SafeLoader that keeps scalar mapping keys as the text written.

    YAML 1.1 resolution would turn keys such as ``404``, ``no`` or ``on``
    into int or bool, which lookups by string path can never reach. Values
    keep their usual typing.
    """

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        self.flatten_mapping(node)
        for key_node, _ in node.value:
            if isinstance(key_node, yaml.ScalarNode) and key_node.tag != _YAML_MERGE_TAG:
                key_node.tag = _YAML_STR_TAG
        return super().construct_mapping(node, deep=deep)


def parse_resource(resource: ResourceFile) -> Any:
    """Read and parse one resource file.

    Args:
        resource: Descriptor of the file to parse

    Returns:
        Parsed content; an empty YAML document yields an empty dict and
        YAML mapping keys are always strings

    Raises:
        OSError: If the file cannot be read
        ResourceSyntaxError: If the content is malformed
        UnknownFormatError: If no parser handles the extension
    """
    try:
        fmt = ResourceFormat(resource.extension)
    except ValueError:
        raise UnknownFormatError(resource.filename) from None

    raw = Path(resource.filename).read_bytes()
    try:
        text = raw.decode("utf-8")
        if fmt.is_yaml:
            data = yaml.load(text, Loader=_ResourceYamlLoader)  # noqa: S506 - SafeLoader subclass
        else:
            data = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ResourceSyntaxError(resource.filename, str(e)) from e

    if data is None and fmt.is_yaml:
        return {}
    return data


class FileSystemBackend:
    """Filesystem backend discovering resources through a path template.

    Implements the Backend protocol. Each base directory is scanned in
    configured order; files inside one directory are merged in sort_key()
    order, and later directories merge over earlier ones.

    Example:
        >>> backend = FileSystemBackend()
        >>> config = TranslatorConfig(base_dir="app")
        >>> [f.filename for f in backend.discover(config)]
        ['/srv/app/locales/en/default.json', '/srv/app/locales/en/errors.yml']
        >>> backend.load(config)["en"]["errors"]["not_found"]
        'Not found'
    """

    __slots__ = ()

    def discover(self, config: TranslatorConfig) -> tuple[ResourceFile, ...]:
        """Find every resource file described by config, in merge order.

        Missing directories produce no files rather than an error.

        Args:
            config: Translator configuration

        Returns:
            Tuple of ResourceFile in merge order
        """
        template = config.template
        files: list[ResourceFile] = []

        for directory in resolve_base_dirs(config.base_dir):
            match = template.matcher(directory)
            found: list[ResourceFile] = []
            for pattern in template.globs(directory):
                for path in glob.glob(pattern):
                    captured = match(path)
                    if captured is None:
                        logger.debug("Skipping %s: does not match path template", path)
                        continue
                    found.append(
                        ResourceFile(
                            filename=os.path.abspath(path),
                            directory=directory,
                            language=captured.language,
                            namespace=captured.namespace,
                            extension=captured.extension,
                        )
                    )
            found.sort(key=sort_key)
            logger.debug("Discovered %d resource file(s) under %s", len(found), directory)
            files.extend(found)

        return tuple(files)

    def read(
        self,
        files: Iterable[ResourceFile],
        resources: Mapping[str, Any] | None = None,
    ) -> Dictionary:
        """Parse files in order and merge them into a new dictionary.

        Args:
            files: Resource files in merge order
            resources: In-memory resources merged last

        Returns:
            Dictionary keyed by language

        Raises:
            OSError: If a file cannot be read
            ResourceSyntaxError: If a file is malformed, or a default-namespace
                file does not contain a mapping
            UnknownFormatError: If no parser handles a file's extension
        """
        dictionary: Dictionary = {}
        count = 0

        for resource in files:
            data = parse_resource(resource)
            if resource.is_default_namespace and not isinstance(data, Mapping):
                detail = f"expected a mapping at the top level, got {type(data).__name__}"
                raise ResourceSyntaxError(resource.filename, detail)
            logger.debug(
                "Parsed %s (lang=%s, namespace=%s)",
                resource.filename,
                resource.language,
                resource.namespace,
            )
            contribution = nest_namespace(resource.namespace, data)
            dictionary[resource.language] = deep_merge(
                dictionary.get(resource.language), contribution
            )
            count += 1

        if resources:
            dictionary = deep_merge(dictionary, resources)

        logger.info(
            "Loaded %d resource file(s) for %d language(s)", count, len(dictionary)
        )
        return dictionary

    def load(self, config: TranslatorConfig) -> Dictionary:
        """Discover, parse and merge every resource described by config.

        Args:
            config: Translator configuration

        Returns:
            Dictionary keyed by language; empty if nothing was found

        Raises:
            OSError: If a file cannot be read
            ResourceSyntaxError: If a file is malformed
        """
        return self.read(self.discover(config), config.resources)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return "FileSystemBackend()"
