import collections
import os
import yaml
from pathlib import Path
from typing import Mapping


class ConfigError(Exception):
    pass


class ConfigurationError(ConfigError):
    """A required configuration value could not be resolved."""

    def __init__(self, name: str, cause: str) -> None:
        super().__init__(f'Cannot get environment variable {name}: {cause}')
        self.name = name
        self.cause = cause


def load_config(configuration_file: str, priority_dirs: list[Path] = []) -> dict:
    """Load a tctools configuration file.

    Args:
        configuration_file (str): name of configuration file.  Name is
        relative to config directory so typically just a file name
        without paths, e.g. "environment.yaml".
    """
    res: dict | None = None

    for dirname in __config_file_paths() + priority_dirs:
        path = dirname / configuration_file
        new_config = None
        if path.is_file():
            try:
                with open(path, 'r') as config:
                    new_config = yaml.safe_load(config.read())
            except (yaml.parser.ParserError, yaml.scanner.ScannerError) as err:
                raise ConfigError(f'Config file {path}: failed to parse: {err}')
        if res is None:
            if new_config is None:
                raise ConfigError(f'Base configuration file {configuration_file} not found in {path}')
            res = new_config
        elif new_config is not None:
            __update_dict(res, new_config)

    assert res is not None, 'Failed to load config (should never happen, we should have hit an error in loop above)'
    return res


def __config_file_paths() -> list[Path]:
    """
    Paths in which to look for config files, by increasing order of
    priority (i.e., any config in the last path should take precedence
    over the others).
    """
    return [
        Path(__file__).parent / 'config',
        Path('/etc/tctools'),
        Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config')) / 'tctools',
    ]


def __update_dict(orig: dict, update: Mapping) -> None:
    """Deep update of a dictionary

    For each entry (k, v) in update such that both orig[k] and v are
    dictionaries, orig[k] is recurisvely updated to v.

    For all other entries (k, v), orig[k] is set to v.
    """
    for key, value in update.items():
        if key in orig and isinstance(value, collections.abc.Mapping) and isinstance(orig[key], collections.abc.Mapping):
            __update_dict(orig[key], value)
        else:
            orig[key] = value


class RunContext:
    """Configuration of a single run.

    Values are looked up by slot (e.g. 'output_dir', 'token') in a mapping
    of variables, normally the process environment.  The mapping is read
    on every lookup, so values that appear late in a run are still seen.
    """

    def __init__(self, variables: Mapping[str, str], names: Mapping[str, str] | None = None) -> None:
        self._variables = variables
        self._names = dict(names) if names is not None else load_config('environment.yaml')

    @classmethod
    def from_environment(cls) -> 'RunContext':
        return cls(os.environ)

    def variable_name(self, slot: str) -> str:
        if slot not in self._names:
            raise ConfigError(f'No environment variable configured for {slot}')
        return self._names[slot]

    def get(self, slot: str) -> str | None:
        return self._variables.get(self.variable_name(slot))

    def fetch(self, slot: str) -> str:
        name = self.variable_name(slot)
        value = self._variables.get(name)
        if value is None:
            raise ConfigurationError(name, 'environment variable not found')
        return value

    @property
    def subtask(self) -> str | None:
        return self.get('subtask')

    @property
    def output_dir(self) -> Path:
        return Path(self.fetch('output_dir'))
