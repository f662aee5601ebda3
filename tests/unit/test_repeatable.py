"""Unit tests for RepeatableEntityAdapter."""

import io
import unittest

from bodycapture.capture.repeatable import MATERIALIZE_CHUNK_SIZE, RepeatableEntityAdapter
from bodycapture.core.entity import ByteArrayEntity, InputStreamEntity, StringEntity
from tests.utils import FailingStream, TrackingStream


class RecordingStream(io.BytesIO):
    """BytesIO that records the size of every read() request."""

    def __init__(self, data: bytes):
        super().__init__(data)
        self.read_sizes: list[int] = []

    def read(self, size=-1):
        self.read_sizes.append(size)
        return super().read(size)


class TestMakeRepeatable(unittest.TestCase):
    def setUp(self):
        self.adapter = RepeatableEntityAdapter()

    def test_repeatable_entity_is_returned_unchanged(self):
        entity = StringEntity("already repeatable")

        result = self.adapter.make_repeatable(entity)

        self.assertIs(result.entity, entity)
        self.assertFalse(result.replaced)
        self.assertEqual(result.bytes_read, 0)

    def test_non_repeatable_entity_is_buffered(self):
        entity = InputStreamEntity(
            io.BytesIO(b"<html></html>"),
            content_length=13,
            content_type="text/html",
            content_encoding="identity",
        )

        result = self.adapter.make_repeatable(entity)

        self.assertTrue(result.replaced)
        self.assertIsInstance(result.entity, ByteArrayEntity)
        self.assertEqual(result.bytes_read, 13)
        self.assertEqual(result.entity.content_type, "text/html")
        self.assertEqual(result.entity.content_encoding, "identity")

    def test_two_full_reads_are_byte_identical(self):
        payload = b"streamed response " * 1000
        entity = InputStreamEntity(io.BytesIO(payload))

        replacement = self.adapter.make_repeatable(entity).entity

        first = replacement.get_content().read()
        second = replacement.get_content().read()
        self.assertEqual(first, payload)
        self.assertEqual(second, payload)

    def test_reads_in_fixed_chunks(self):
        stream = RecordingStream(b"z" * (MATERIALIZE_CHUNK_SIZE * 2 + 10))

        result = self.adapter.make_repeatable(InputStreamEntity(stream))

        self.assertEqual(result.bytes_read, MATERIALIZE_CHUNK_SIZE * 2 + 10)
        self.assertTrue(all(size == MATERIALIZE_CHUNK_SIZE for size in stream.read_sizes))

    def test_stream_is_closed_after_buffering(self):
        stream = TrackingStream(b"data")

        self.adapter.make_repeatable(InputStreamEntity(stream))

        self.assertTrue(stream.was_closed)

    def test_read_failure_keeps_original_entity(self):
        stream = FailingStream(b"half of the body")
        entity = InputStreamEntity(stream)

        result = self.adapter.make_repeatable(entity)

        self.assertIs(result.entity, entity)
        self.assertFalse(result.replaced)
        self.assertEqual(result.bytes_read, 0)
        self.assertTrue(stream.closed)

    def test_empty_stream_becomes_empty_entity(self):
        result = self.adapter.make_repeatable(InputStreamEntity(io.BytesIO(b"")))

        self.assertTrue(result.replaced)
        self.assertEqual(result.entity.content_length, 0)


if __name__ == "__main__":
    unittest.main()
