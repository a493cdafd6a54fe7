import imageio.v3 as imageio
from pathlib import Path

from .image import Image, IOBackend, MIME_PNG, MIME_JPEG
import numpy as np

EXTENSIONS = {
	MIME_PNG: '.png',
	MIME_JPEG: '.jpg',
}

class ImIOBackend(IOBackend):
	@staticmethod
	def load(path: str|Path) -> Image:
		src = imageio.imread(Path(path) if isinstance(path, str) else path, plugin='pillow')
		return Image(src)

	@staticmethod
	def decode(data: bytes) -> Image:
		return Image(imageio.imread(data, plugin='pillow'))

	@staticmethod
	def encode(image: Image, mimeType: str, quality: int=90) -> bytes:
		if mimeType not in EXTENSIONS:
			raise ValueError(f'Unsupported image mime type "{mimeType}"! Only PNG and JPEG can be embedded in glTF.')

		data = image.data
		kwargs = {}
		if mimeType == MIME_JPEG:
			# JPEG cannot carry alpha
			data = image.normalize('RGB').data
			kwargs['quality'] = quality

		if data.shape[2] == 1:
			data = data.reshape(data.shape[:2])

		try:
			return imageio.imwrite('<bytes>', np.ascontiguousarray(data), plugin='pillow', extension=EXTENSIONS[mimeType], **kwargs)
		except TypeError as e:
			# Wrap the error message, since the default one is totally useless.
			raise TypeError(f'Invalid datatype - attempted to encode {data.dtype} data as "{mimeType}"! '+str(e))
