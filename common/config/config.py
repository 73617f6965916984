from __future__ import annotations

import logging
import os
from decimal import Decimal
from typing import Final

from .constants import CHAIN_INDEX_VER, SHORT_SYNC_STAT_DELAY_SEC, LONG_SYNC_STAT_DELAY_SEC, SYNCED_SLOT_GAP
from ..utils.cached import cached_property, cached_method
from ..utils.format import str_fmt_object

_LOG = logging.getLogger(__name__)


class Config:
    # Sync statistics configuration
    gather_sync_stat_name: Final[str] = "GATHER_SYNC_STATISTICS"
    sync_stat_short_delay_sec_name: Final[str] = "SYNC_STAT_SHORT_DELAY_SEC"
    sync_stat_long_delay_sec_name: Final[str] = "SYNC_STAT_LONG_DELAY_SEC"
    sync_stat_synced_slot_gap_name: Final[str] = "SYNC_STAT_SYNCED_SLOT_GAP"
    sync_stat_queue_capacity_name: Final[str] = "SYNC_STAT_QUEUE_CAPACITY"

    _1min: Final[int] = 60
    _1hour: Final[int] = 60 * 60
    _1day: Final[int] = 24 * _1hour

    @staticmethod
    def _env_bool(name: str, default_value: bool) -> bool:
        true_value_list = ("TRUE", "YES", "ON", "1")
        false_value_list = ("FALSE", "NO", "OFF", "0")
        os_def_value = true_value_list[0] if default_value else false_value_list[0]

        value = os.environ.get(name, os_def_value).upper().strip()  # fmt: skip
        if (value not in true_value_list) and (value not in false_value_list):
            _LOG.warning(
                "%s can be: %s or %s, force to use the default value %s",
                name,
                true_value_list,
                false_value_list,
                os_def_value,
            )
            return default_value

        return value in true_value_list

    @staticmethod
    def _env_num(
        name: str,
        default_value: int | float | Decimal,
        min_value: int | float | Decimal | None = None,
        max_value: int | float | Decimal | None = None,
    ) -> int | float | Decimal:
        value = os.environ.get(name, None)
        if value is None:
            return default_value

        try:
            if isinstance(default_value, int):
                value = int(value, base=10)
            elif isinstance(default_value, float):
                value = float(value)
            else:
                value = Decimal(value)

            if min_value is not None:
                assert type(min_value) is type(default_value), f"{type(min_value)} is {type(default_value)}"
                if value < min_value:
                    _LOG.warning("%s cannot be less than min value %s", name, min_value)
                    value = min_value

            if max_value is not None:
                assert type(max_value) is type(default_value)
                if value > max_value:
                    _LOG.warning("%s cannot be bigger than max value %s", name, max_value)
                    value = max_value
            return value

        except ValueError:
            _LOG.warning("bad value for %s, force to use the default value %s", name, default_value)
            return default_value

    ##########################
    # Sync statistics settings

    @cached_property
    def gather_sync_stat(self) -> bool:
        return self._env_bool(self.gather_sync_stat_name, True)

    @cached_property
    def sync_stat_short_delay_sec(self) -> float:
        """Delay between sync reports while the chain-index is catching up with the node"""
        return self._env_num(self.sync_stat_short_delay_sec_name, SHORT_SYNC_STAT_DELAY_SEC, 0.01, float(self._1hour))

    @cached_property
    def sync_stat_long_delay_sec(self) -> float:
        """Delay between sync reports when the chain-index is synced or the node tip is unknown"""
        return self._env_num(self.sync_stat_long_delay_sec_name, LONG_SYNC_STAT_DELAY_SEC, 0.01, float(self._1day))

    @cached_property
    def sync_stat_synced_slot_gap(self) -> int:
        return self._env_num(self.sync_stat_synced_slot_gap_name, SYNCED_SLOT_GAP, 1, 1_000_000)

    @cached_property
    def sync_stat_queue_capacity(self) -> int:
        """Max number of not-read items in one subscription, 0 - unlimited"""
        return self._env_num(self.sync_stat_queue_capacity_name, 0, 0, 10_000_000)

    @cached_method
    def to_string(self) -> str:
        cfg_dict = {
            "CHAIN_INDEX_VERSION": CHAIN_INDEX_VER,
            self.gather_sync_stat_name: self.gather_sync_stat,
            self.sync_stat_short_delay_sec_name: self.sync_stat_short_delay_sec,
            self.sync_stat_long_delay_sec_name: self.sync_stat_long_delay_sec,
            self.sync_stat_synced_slot_gap_name: self.sync_stat_synced_slot_gap,
            self.sync_stat_queue_capacity_name: self.sync_stat_queue_capacity,
        }
        return str_fmt_object(cfg_dict, name="Config")
