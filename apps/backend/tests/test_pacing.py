"""
Tests for inter-source pacing.
"""
import asyncio

import pytest
from unittest.mock import AsyncMock, patch

from core.pacing import FixedDelayPacer, NoPacer, TokenBucket, TokenBucketPacer, build_pacer


@pytest.mark.asyncio
async def test_fixed_delay_sleeps():
    with patch('core.pacing.asyncio.sleep', new=AsyncMock()) as mock_sleep:
        await FixedDelayPacer(1.0).wait()
    mock_sleep.assert_awaited_once_with(1.0)


@pytest.mark.asyncio
async def test_zero_delay_does_not_sleep():
    with patch('core.pacing.asyncio.sleep', new=AsyncMock()) as mock_sleep:
        await FixedDelayPacer(0).wait()
    mock_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_token_bucket_allows_first_source_immediately():
    with patch('core.pacing.asyncio.sleep', new=AsyncMock()) as mock_sleep:
        await TokenBucketPacer(sources_per_minute=60).wait()
    mock_sleep.assert_not_awaited()


def test_token_bucket_pacer_built_outside_event_loop():
    pacer = TokenBucketPacer(sources_per_minute=6000)

    async def contended_waits():
        await asyncio.gather(pacer.wait(), pacer.wait(), pacer.wait())

    asyncio.run(contended_waits())
    asyncio.run(contended_waits())

    assert pacer.bucket.tokens < 1.0


def test_token_bucket_wait_time():
    bucket = TokenBucket(1.0, refill_rate=0.5)
    assert bucket.consume()
    assert not bucket.consume()
    assert 0 < bucket.wait_time() <= 2.0


@pytest.mark.parametrize("mode,expected", [
    ("fixed", FixedDelayPacer),
    ("token_bucket", TokenBucketPacer),
    ("none", NoPacer),
    ("bogus", FixedDelayPacer),
])
def test_build_pacer(mode, expected):
    assert isinstance(build_pacer(mode), expected)
