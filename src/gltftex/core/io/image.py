import numpy as np
from numpy.typing import DTypeLike
from pathlib import Path
from typing import Literal
from abc import abstractmethod

MIME_PNG = 'image/png'
MIME_JPEG = 'image/jpeg'

class IOBackend():
	'''
	Represents an abstract codec interface for turning images into encoded
	PNG/JPEG bytes and back. Only PNG and JPEG are valid glTF image payloads.
	'''

	@staticmethod
	@abstractmethod
	def encode(image: 'Image', mimeType: str, quality: int=90) -> bytes:
		...

	@staticmethod
	@abstractmethod
	def decode(data: bytes) -> 'Image':
		...

	@staticmethod
	@abstractmethod
	def load(path: str|Path) -> 'Image':
		...

class Image():
	'''
	Thin numpy wrapper used for all pixel work. Data is laid out as
	(height, width, channels), row 0 at the top.
	'''

	backend: type[IOBackend] # static

	@staticmethod
	def set_backend(backend: type[IOBackend]):
		Image.backend = backend

	@staticmethod
	def load(path: str|Path) -> 'Image':
		return Image.backend.load(path)

	@staticmethod
	def decode(data: bytes) -> 'Image':
		return Image.backend.decode(data)

	@staticmethod
	def blank(size: tuple[int, int], color: tuple[int|float, ...]=(0, 0, 0, 0), dtype: DTypeLike='uint8') -> 'Image':
		''' Creates a blank image by size, type, and color. '''
		data = np.empty((size[1], size[0], len(color)), dtype, order='C')
		data[...] = color
		return Image(data)

	@staticmethod
	def merge(axes: tuple["Image", ...]) -> 'Image':
		''' Merges N images into one as color channels. '''
		width, height = axes[0].size
		for i, img in enumerate(axes):
			assert img.channels == 1, f'Expected single-channel image when merging channel {i}'
			assert img.size == (width, height), f'Expected size ({width}, {height}) when merging channel {i}, but got {img.size}'
		data = np.stack([img.data.reshape((height, width)) for img in axes], axis=2)
		return Image(data)


	data: np.ndarray

	def __init__(self, src: np.ndarray) -> None:
		if not isinstance(src, np.ndarray):
			raise NotImplementedError('Cannot construct generic image from non-ndarray. Use IO implementation!')

		self.data = src

		if len(self.data.shape) == 2:
			self.data = self.data.reshape((self.data.shape[0], self.data.shape[1], 1))

	def split(self) -> list["Image"]:
		''' Returns this image's data as a list of channels '''
		return [Image(self.data[:, :, i].copy()) for i in range(self.channels)]

	def normalize(self, mode: Literal['RGB', 'RGBA', 'L']) -> 'Image':
		s = self.split()
		opaque = lambda: Image.blank(self.size, dtype=self.data.dtype, color=(np.iinfo(self.data.dtype).max if self.data.dtype.kind != 'f' else 1,))
		if self.channels == 1:
			if mode == 'L': return self
			if mode == 'RGB': return Image.merge(( s[0], s[0], s[0] ))
			return Image.merge(( s[0], s[0], s[0], opaque() ))
		if self.channels == 3:
			if mode == 'L': return s[0]
			if mode == 'RGB': return self
			return Image.merge(( s[0], s[1], s[2], opaque() ))
		if self.channels == 4:
			if mode == 'L': return s[0]
			if mode == 'RGB': return Image.merge(tuple(s[:3]))
			return self

		raise ValueError(f'Image has unrecognized number of channels ({self.channels})! Failed to convert to {mode}!')

	def encode(self, mimeType: str, quality: int=90) -> bytes:
		''' Encodes this image as PNG or JPEG bytes. '''
		return Image.backend.encode(self, mimeType, quality)

	def copy(self) -> "Image":
		''' Clones this image. '''
		return Image(self.data.copy())

	@property
	def size(self) -> tuple[int, int]:
		return (np.size(self.data, 1), np.size(self.data, 0))

	@property
	def channels(self) -> int:
		return np.size(self.data, 2)
