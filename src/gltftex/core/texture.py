from .io.image import Image
from .enums import WrapMode, FilterMode, PixelFormat, ColorSpace
from . import texops
import numpy as np

class Texture():
	'''
	A host texture. Textures compare and hash by identity, so two
	pixel-identical textures are still exported separately.
	'''

	name: str
	width: int
	height: int
	wrapMode: WrapMode
	filterMode: FilterMode
	mipmapCount: int
	pixelFormat: PixelFormat|None	# None when the native format cannot be introspected
	srgb: bool						# Stored data is sRGB encoded

	def __init__(self,
			name: str,
			width: int,
			height: int,
			wrapMode: WrapMode=WrapMode.Repeat,
			filterMode: FilterMode=FilterMode.Bilinear,
			mipmapCount: int=1,
			pixelFormat: PixelFormat|None=PixelFormat.RGBA32,
			srgb: bool=True):

		self.name = name
		self.width = width
		self.height = height
		self.wrapMode = wrapMode
		self.filterMode = filterMode
		self.mipmapCount = mipmapCount
		self.pixelFormat = pixelFormat
		self.srgb = srgb

	def __repr__(self) -> str:
		return f'<{type(self).__name__} "{self.name}" {self.width}x{self.height}>'

def as_rgba8(data: np.ndarray) -> Image:
	img = Image(np.ascontiguousarray(data))
	assert img.data.dtype == np.uint8, f'Expected uint8 pixel data, but got {img.data.dtype}'
	return img.normalize('RGBA')

class Texture2D(Texture):
	data: np.ndarray

	def __init__(self, name: str, data: np.ndarray, **kwargs) -> None:
		super().__init__(name, np.size(data, 1), np.size(data, 0), **kwargs)
		self.data = data

	def read(self, space: ColorSpace) -> Image:
		''' Reads the pixels as RGBA8 through the requested color space. '''
		return texops.transfer(as_rgba8(self.data), self.srgb, space)

class RenderTexture(Texture2D):
	def snapshot(self) -> Texture2D:
		''' Reads back the current contents into a plain 2D texture. '''
		return Texture2D(self.name, self.data.copy(),
			wrapMode=self.wrapMode,
			filterMode=self.filterMode,
			mipmapCount=self.mipmapCount,
			pixelFormat=self.pixelFormat,
			srgb=self.srgb)

class Cubemap(Texture):
	faces: list[np.ndarray] # +X, -X, +Y, -Y, +Z, -Z

	def __init__(self, name: str, faces: list[np.ndarray], **kwargs) -> None:
		if len(faces) != 6:
			raise ValueError(f'Cubemap requires 6 faces, but got {len(faces)}!')
		super().__init__(name, np.size(faces[0], 1), np.size(faces[0], 0), **kwargs)
		self.faces = faces

	def read_faces(self, space: ColorSpace) -> list[Image]:
		return [texops.transfer(as_rgba8(face), self.srgb, space) for face in self.faces]
