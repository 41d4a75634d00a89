"""Store Protocols — verifies the store contracts import and their annotations resolve.

Tests cover:
    - `list[...]` return types resolve to the builtin even though each store
      defines its own `list` method
    - SQL stores and in-memory fakes expose every Protocol method
"""

import inspect
import typing

import pytest

from tests.services.fake_stores import FakeOpinionStore, FakeWorkStore, FakeWriterStore
from what_writers_like.core.entities import Opinion, Work, Writer
from what_writers_like.core.repository_protocols import OpinionStore, WorkStore, WriterStore
from what_writers_like.infrastructure.opinion_store import SqlOpinionStore
from what_writers_like.infrastructure.work_store import SqlWorkStore
from what_writers_like.infrastructure.writer_store import SqlWriterStore


@pytest.mark.parametrize("cls, entity", [
    (WriterStore, Writer), (SqlWriterStore, Writer),
    (WorkStore, Work), (SqlWorkStore, Work),
    (OpinionStore, Opinion), (SqlOpinionStore, Opinion),
])
def test_list_annotation_is_builtin_list(cls, entity):
    hints = typing.get_type_hints(cls.list)
    assert hints["return"] == list[entity]


def test_search_annotations_resolve():
    assert typing.get_type_hints(WriterStore.search)["return"] == list[Writer]
    assert typing.get_type_hints(SqlWorkStore.search)["return"] == list[Work]


def _protocol_methods(protocol) -> set[str]:
    return {
        name for name, member in vars(protocol).items()
        if inspect.iscoroutinefunction(member)
    }


@pytest.mark.parametrize("protocol, implementations", [
    (WriterStore, (SqlWriterStore, FakeWriterStore)),
    (WorkStore, (SqlWorkStore, FakeWorkStore)),
    (OpinionStore, (SqlOpinionStore, FakeOpinionStore)),
])
def test_implementations_cover_protocol(protocol, implementations):
    methods = _protocol_methods(protocol)
    assert methods
    for impl in implementations:
        assert methods <= set(dir(impl)), impl.__name__
