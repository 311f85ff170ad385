import base64
import io
import random

import pytest
from PIL import Image

from david.services import camera, temperature
from david.services.temperature import TemperatureStatus


class _FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.mark.parametrize(
    "value, status",
    [
        (35.8, TemperatureStatus.LOW),
        (36.0, TemperatureStatus.LOW),
        (36.1, TemperatureStatus.NORMAL),
        (37.5, TemperatureStatus.NORMAL),
        (37.6, TemperatureStatus.ELEVATED),
        (38.5, TemperatureStatus.ELEVATED),
        (38.6, TemperatureStatus.FEVER),
        (40.2, TemperatureStatus.FEVER),
    ],
)
def test_status_thresholds(value, status):
    reading = temperature.classify_temperature(value)
    assert reading.status is status
    assert reading.guidance == temperature.GUIDANCE[status]


def test_simulated_range_and_precision():
    rng = random.Random(1234)
    for _ in range(500):
        v = temperature.simulate_temperature(rng)
        assert 35.8 <= v <= 37.8
        assert v == round(v, 1)


def test_simulated_extremes():
    assert temperature.simulate_temperature(_FixedRandom(0.0)) == 35.8
    assert temperature.simulate_temperature(_FixedRandom(0.5)) == 36.8
    assert temperature.simulate_temperature(_FixedRandom(0.9999)) == 37.8


def test_take_reading_uses_rng():
    reading = temperature.take_reading(_FixedRandom(0.5))
    assert reading.value == 36.8
    assert reading.status is TemperatureStatus.NORMAL


def test_format_reading():
    reading = temperature.classify_temperature(36.8)
    assert temperature.format_reading(reading) == (
        "Temperature Check Result:\n"
        "Temperature: 36.8°C\n"
        "Status: NORMAL\n"
        "Guidance: Your temperature is normal. Continue monitoring your health."
    )


def test_reading_to_dict():
    d = temperature.classify_temperature(39.0).to_dict()
    assert d == {
        "value": 39.0,
        "status": "fever",
        "guidance": temperature.GUIDANCE[TemperatureStatus.FEVER],
    }


def _png_b64(size=(4, 3)):
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


def test_decode_frame_raw_base64():
    frame = camera.decode_frame(_png_b64())
    assert (frame.width, frame.height) == (4, 3)
    assert frame.format == "PNG"
    assert frame.size_bytes > 0


def test_decode_frame_data_url():
    frame = camera.decode_frame("data:image/png;base64," + _png_b64((8, 8)))
    assert (frame.width, frame.height) == (8, 8)


@pytest.mark.parametrize(
    "data",
    [
        "not base64!!",
        base64.b64encode(b"hello, not an image").decode("ascii"),
        "data:image/png," + _png_b64(),
        "",
    ],
)
def test_decode_frame_rejects_garbage(data):
    with pytest.raises(camera.InvalidFrame):
        camera.decode_frame(data)


def test_decode_frame_size_cap():
    with pytest.raises(camera.InvalidFrame):
        camera.decode_frame(_png_b64(), max_bytes=10)
