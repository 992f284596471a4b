# Copyright 2016 Yelp Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
from __future__ import annotations

import logging
import os
from typing import NamedTuple

import yaml
from typing_extensions import TypedDict

from kafka_planner.reassignment.placer import DiskComparison
from kafka_planner.reassignment.usage import ResetPolicy
from kafka_planner.util.error import InvalidConfigurationError
from kafka_planner.util.error import MissingConfigurationError


DEFAULT_PLANNER_CONFIG_BASE_PATH = '/etc/kafka_planner'
HOME_OVERRIDE = '.kafka_planner'
CONFIG_FILE_NAME = 'planner.yaml'

_log = logging.getLogger(__name__)


class PlannerConfig(NamedTuple):
    """Planner configuration.
    :param reset_policy: ResetPolicy used by the reset phase
    :param disk_comparison: DiskComparison used by the last tie-break
    """
    reset_policy: ResetPolicy = ResetPolicy.SUBTRACT
    disk_comparison: DiskComparison = DiskComparison.SYMMETRIC


class PlannerConfigDict(TypedDict, total=False):
    reset_policy: str
    disk_comparison: str


def load_yaml_config(config_path: str) -> PlannerConfigDict:
    with open(config_path) as config_file:
        return yaml.safe_load(config_file) or {}


def parse_planner_config(data: PlannerConfigDict, source: str = '<dict>') -> PlannerConfig:
    """Build a PlannerConfig, missing keys take the default value.

    :raises: InvalidConfigurationError for unknown keys or values.
    """
    if not isinstance(data, dict):
        raise InvalidConfigurationError(  # type: ignore[unreachable]
            f"Invalid planner configuration {source}",
        )
    unknown_keys = set(data.keys()) - set(PlannerConfig._fields)
    if unknown_keys:
        raise InvalidConfigurationError(
            "Unknown keys {keys} in planner configuration {source}".format(
                keys=', '.join(sorted(unknown_keys)),
                source=source,
            )
        )
    try:
        return PlannerConfig(
            reset_policy=ResetPolicy(data.get('reset_policy', ResetPolicy.SUBTRACT.value)),
            disk_comparison=DiskComparison(data.get('disk_comparison', DiskComparison.SYMMETRIC.value)),
        )
    except ValueError as e:
        _log.exception("Invalid planner configuration")
        raise InvalidConfigurationError(
            f"Invalid planner configuration {source}: {e}",
        )


def get_conf_dirs() -> list[str]:
    config_dirs = []
    if os.environ.get("KAFKA_PLANNER_CONFIG_DIR"):
        config_dirs.append(os.environ["KAFKA_PLANNER_CONFIG_DIR"])
    if os.environ.get("HOME"):
        home_config = os.path.join(
            os.path.abspath(os.environ['HOME']),
            HOME_OVERRIDE,
        )
        if os.path.isdir(home_config):
            config_dirs.append(home_config)
    config_dirs.append(DEFAULT_PLANNER_CONFIG_BASE_PATH)
    return config_dirs


def get_planner_config(config_path: str | None = None) -> PlannerConfig:
    """Return the planner configuration.

    When config_path is not given, planner.yaml is looked up in
    $KAFKA_PLANNER_CONFIG_DIR, $HOME/.kafka_planner and /etc/kafka_planner.
    The default configuration is used when none of them exists.

    :param config_path: explicit path of the configuration file
    :raises: MissingConfigurationError if config_path doesn't exist,
        InvalidConfigurationError if the file is invalid.
    """
    if config_path:
        if not os.path.isfile(config_path):
            raise MissingConfigurationError(
                f"Planner configuration {config_path} does not exist",
            )
        candidates = [config_path]
    else:
        candidates = [
            os.path.join(config_dir, CONFIG_FILE_NAME)
            for config_dir in get_conf_dirs()
        ]
    for path in candidates:
        if os.path.isfile(path):
            _log.debug("Loading planner configuration from %s", path)
            try:
                data = load_yaml_config(path)
            except yaml.YAMLError:
                _log.exception("Invalid planner configuration file")
                raise InvalidConfigurationError(
                    f"Invalid planner configuration file {path}",
                )
            return parse_planner_config(data, path)
    _log.debug("No planner configuration found, using defaults.")
    return PlannerConfig()
