"""Configuration loader for Retro Insights."""

import logging
import os.path

import yaml

from ..columns import WORK_ITEM_FIELDS
from ..common_constants import (
    CHART_FILENAME_KEYS,
    CHART_TITLE_KEYS,
    DATA_FILENAME_KEYS,
)
from .exceptions import ConfigError
from .type_utils import expand_key, force_bool, force_list, force_str_list
from .yaml_utils import ordered_load

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ("extends", "input", "columns", "output")


def default_options():
    """Create default options dictionary."""
    settings = {"warn_on_malformed": False}
    for key in DATA_FILENAME_KEYS + CHART_FILENAME_KEYS + CHART_TITLE_KEYS:
        settings[key] = None

    return {
        "input": {"sheet": None},
        "columns": {},
        "settings": settings,
    }


def _parse_input_config(config, options):
    """Parse input configuration."""
    if "input" not in config or config["input"] is None:
        return

    input_config = config["input"]
    if "sheet" in input_config:
        sheet = input_config["sheet"]
        # Integers select a sheet by position
        options["input"]["sheet"] = sheet if isinstance(sheet, int) else str(sheet)


def _parse_columns_config(config, options):
    """Parse column alias overrides, keyed by work item field."""
    if "columns" not in config or config["columns"] is None:
        return

    fields = {expand_key(field): field for field in WORK_ITEM_FIELDS}
    for name, aliases in config["columns"].items():
        field = fields.get(expand_key(name))
        if field is None:
            raise ConfigError(
                f"Unknown field `{name}` in `Columns`. "
                f"Expected one of: {', '.join(fields)}"
            )
        options["columns"][field] = force_str_list(field, aliases)


def _parse_output_config(config, options):
    """Parse output configuration."""
    if "output" not in config or config["output"] is None:
        return

    output_config = config["output"]
    settings = options["settings"]

    if expand_key("output_directory") in output_config:
        options["output_directory"] = str(
            output_config[expand_key("output_directory")]
        )

    _parse_filename_values(output_config, settings)
    _parse_filename_list_values(output_config, settings)
    _parse_string_values(output_config, settings)
    _parse_boolean_values(output_config, settings)


def _parse_filename_values(output_config, settings):
    """Parse filename values from output config."""
    for key in CHART_FILENAME_KEYS:
        if expand_key(key) in output_config:
            settings[key] = os.path.basename(str(output_config[expand_key(key)]))


def _parse_filename_list_values(output_config, settings):
    """Parse filename list values from output config."""
    for key in DATA_FILENAME_KEYS:
        if expand_key(key) in output_config:
            settings[key] = [
                os.path.basename(str(filename))
                for filename in force_list(output_config[expand_key(key)])
            ]


def _parse_string_values(output_config, settings):
    """Parse string values from output config."""
    for key in CHART_TITLE_KEYS:
        if expand_key(key) in output_config:
            settings[key] = str(output_config[expand_key(key)])


def _parse_boolean_values(output_config, settings):
    """Parse boolean values from output config."""
    key = "warn_on_malformed"
    config_key = "warn on malformed values"
    if config_key in output_config:
        settings[key] = force_bool(config_key, output_config[config_key])


def _load_extended_options(config, cwd, visited_files):
    if cwd is None:
        raise ConfigError("`extends` is not supported here.")

    extends_filename = os.path.abspath(
        os.path.normpath(
            os.path.join(cwd, str(config["extends"]).replace("/", os.path.sep))
        )
    )

    if not os.path.exists(extends_filename):
        raise ConfigError(
            f"File `{extends_filename}` referenced in `extends` not found."
        )

    if extends_filename in visited_files:
        raise ConfigError(
            f"Circular extends reference detected: {extends_filename}"
        )

    visited_files.add(extends_filename)

    logger.debug("Extending file %s", extends_filename)
    with open(extends_filename, encoding="utf-8") as extends_file:
        return config_to_options(
            extends_file.read(),
            cwd=os.path.dirname(extends_filename),
            _visited_files=visited_files,
        )


def config_to_options(data, cwd=None, _visited_files=None):
    """
    Parse YAML config data and return options dict.

    Args:
        data: YAML text.
        cwd: Directory that `Extends` paths are relative to. `Extends` is
            rejected when this is not given.
    """
    if _visited_files is None:
        _visited_files = set()

    try:
        config = ordered_load(data, yaml.SafeLoader)
    except yaml.YAMLError as e:
        raise ConfigError("Unable to parse YAML configuration file.") from e

    if config is None:
        raise ConfigError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigError("Configuration file must contain a mapping of sections")

    options = default_options()

    if "extends" in config:
        options = _load_extended_options(config, cwd, _visited_files)

    for section in config:
        if str(section).lower() not in KNOWN_SECTIONS:
            logger.warning("Ignoring unknown configuration section `%s`", section)

    _parse_input_config(config, options)
    _parse_columns_config(config, options)
    _parse_output_config(config, options)

    return options
