import numpy as np
import pytest

import gltftex
from gltftex.core.enums import PixelFormat
from gltftex.core.texture import Texture2D, Cubemap
from gltftex.core.config import ExportSettings

def solid(width: int, height: int, color: tuple[int, ...]) -> np.ndarray:
	data = np.empty((height, width, len(color)), np.uint8)
	data[...] = color
	return data

def make_texture(name='tex', width=4, height=4, color=(255, 0, 0, 255), **kwargs) -> Texture2D:
	return Texture2D(name, solid(width, height, color), **kwargs)

FACE_COLORS = [
	(255, 0, 0, 255),	# +X
	(0, 255, 0, 255),	# -X
	(0, 0, 255, 255),	# +Y
	(255, 255, 0, 255),	# -Y
	(0, 255, 255, 255),	# +Z
	(255, 0, 255, 255),	# -Z
]

@pytest.fixture
def cubemap() -> Cubemap:
	return Cubemap('sky', [solid(8, 8, c) for c in FACE_COLORS], pixelFormat=PixelFormat.RGB24)

@pytest.fixture
def settings() -> ExportSettings:
	return ExportSettings()

@pytest.fixture
def opaque() -> Texture2D:
	return make_texture('opaque', 16, 16, (10, 20, 30), pixelFormat=PixelFormat.RGB24)
