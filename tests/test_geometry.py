import numpy as np
import pytest

from bayer2tga.config import DEFAULT_CONFIG, SensorConfig
from bayer2tga.errors import FrameShapeError, GeometryError
from bayer2tga.geometry import Channel, channel_plane, check_frame, frame_from_buffer, sample_offset


def test_offsets_within_first_block():
    cfg = DEFAULT_CONFIG
    assert sample_offset(0, 0, Channel.RED, cfg) == 0
    assert sample_offset(0, 0, Channel.GREEN_RED_ROW, cfg) == 1
    assert sample_offset(0, 0, Channel.GREEN_BLUE_ROW, cfg) == 2 * cfg.width
    assert sample_offset(0, 0, Channel.BLUE, cfg) == 2 * cfg.width + 1


def test_offset_of_later_block():
    # One block row spans two mosaic rows of 2 * W samples each.
    assert sample_offset(1, 1, Channel.RED, DEFAULT_CONFIG) == 1920 * 4 + 2
    assert sample_offset(1919, 1079, Channel.BLUE, DEFAULT_CONFIG) == DEFAULT_CONFIG.sample_count - 1


def test_offsets_agree_with_channel_planes(small_config):
    frame = np.arange(small_config.sample_count, dtype=np.uint16).reshape(small_config.mosaic_shape)
    flat = frame.reshape(-1)
    for channel in Channel:
        plane = channel_plane(frame, channel)
        assert plane.shape == (small_config.height, small_config.width)
        for y in range(small_config.height):
            for x in range(small_config.width):
                assert flat[sample_offset(x, y, channel, small_config)] == plane[y, x]


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
def test_offset_outside_sensor_raises(small_config, x, y):
    with pytest.raises(GeometryError):
        sample_offset(x, y, Channel.RED, small_config)


def test_channel_plane_is_a_view(small_config):
    frame = np.zeros(small_config.mosaic_shape, dtype=np.uint16)
    channel_plane(frame, Channel.BLUE)[...] = 7
    assert frame[1::2, 1::2].min() == 7
    assert frame.sum() == 7 * small_config.width * small_config.height


def test_check_frame_rejects_wrong_shape(small_config):
    with pytest.raises(FrameShapeError) as info:
        check_frame(np.zeros((3, 4), dtype=np.uint16), small_config)
    assert info.value.expected == small_config.mosaic_shape
    assert info.value.actual == (3, 4)


def test_check_frame_rejects_float_samples(small_config):
    with pytest.raises(GeometryError):
        check_frame(np.zeros(small_config.mosaic_shape, dtype=np.float32), small_config)


def test_frame_from_buffer(small_config):
    frame = frame_from_buffer(np.arange(small_config.sample_count), small_config)
    assert frame.shape == small_config.mosaic_shape
    assert frame.dtype == np.uint16
    with pytest.raises(FrameShapeError):
        frame_from_buffer(np.arange(small_config.sample_count - 1), SensorConfig(width=4, height=3))
