"""
# Lightmark: bases.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Base classes for rewrite rules.
"""

import abc

from lightmark.constants import VERBOSE_MODE_DIVIDER_SYMBOL_COUNT
from lightmark.exceptions import CommittedMutateException, UncommittedApplyException


class Rule(abc.ABC):
    """
    Base class for a rewrite rule.

    A rule is configured through its property setters and then committed.
    Once committed, a rule is immutable and may be applied any number of times;
    it holds no state between applications, so that the same rule instance
    can be shared by every document.
    """
    _is_committed: bool
    _id: str

    def __init__(self, id_: str):
        self._is_committed = False
        self._id = id_

    @property
    def id_(self) -> str:
        return self._id

    @property
    def is_committed(self) -> bool:
        return self._is_committed

    def commit(self):
        self._validate_mandatory_attributes()
        self._set_apply_method_variables()
        self._is_committed = True

    def apply(self, string: str, verbose_mode_enabled: bool = False) -> str:
        if not self._is_committed:
            raise UncommittedApplyException('error: cannot call `apply(string)` before `commit()`')

        string_before = string
        string = self._apply(string)
        string_after = string

        if verbose_mode_enabled:
            if string_before == string_after:
                no_change_indicator = ' (no change)'
            else:
                no_change_indicator = ''

            print('<' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' BEFORE #{self._id}')
            print(string_before)
            print('=' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + no_change_indicator)
            print(string_after)
            print('>' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' AFTER #{self._id}')
            print('\n\n\n\n')

        return string_after

    def _ensure_uncommitted(self, attribute_name: str):
        if self._is_committed:
            raise CommittedMutateException(f'error: cannot set `{attribute_name}` after `commit()`')

    @abc.abstractmethod
    def _validate_mandatory_attributes(self):
        """
        Ensure all mandatory attributes have been set.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def _set_apply_method_variables(self):
        """
        Set variables used in `self._apply(string)`.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def _apply(self, string: str) -> str:
        """
        Apply the rule to a string.
        """
        raise NotImplementedError
