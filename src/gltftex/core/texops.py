from contextlib import contextmanager
from typing import Iterator
from .io.image import Image
from .enums import TextureMapType, ColorSpace
import logging as log
import numpy as np

'''
References:
- https://registry.khronos.org/glTF/specs/2.0/glTF-2.0.html#metallic-roughness-material
- https://registry.khronos.org/OpenGL/specs/gl/glspec46.core.pdf (8.13, cube map face selection)
'''

'''
	Swizzles are expressed as out = M * src + bias, where src is RGBA (0-255).

	metallic-gloss -> metallic-roughness:
		R = 0, G = 255 - A (gloss -> roughness), B = R (metallic), A = 255
	packed normal -> rgb normal:
		R = A, G = G, B = B, A = 255
'''

METALLIC_GLOSS_SWIZZLE = (
	np.array([
		[ 0, 0, 0,  0],
		[ 0, 0, 0, -1],
		[ 1, 0, 0,  0],
		[ 0, 0, 0,  0]], dtype=np.int32),
	np.array([0, 255, 0, 255], dtype=np.int32)
)

NORMAL_SWIZZLE = (
	np.array([
		[ 0, 0, 0, 1],
		[ 0, 1, 0, 0],
		[ 0, 0, 1, 0],
		[ 0, 0, 0, 0]], dtype=np.int32),
	np.array([0, 0, 0, 255], dtype=np.int32)
)

class SurfacePool():
	'''
	Hands out transient RGBA8 work surfaces. Every surface is released when its
	`temporary()` block exits, whether or not the conversion succeeded.
	'''

	live: int

	def __init__(self) -> None:
		self.live = 0

	@contextmanager
	def temporary(self, size: tuple[int, int]) -> Iterator[Image]:
		surface = Image.blank(size)
		self.live += 1
		try:
			yield surface
		finally:
			self.live -= 1
			surface.data = np.empty((0, 0, 4), np.uint8)

surfaces = SurfacePool()


''' Color transfer '''

def srgb_to_linear(img: Image) -> Image:
	''' Decodes the RGB channels of an 8-bit sRGB image to linear. Alpha is untouched. '''
	out = img.copy()
	c = img.data[:, :, :3].astype(np.float32) / 255
	c = np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)
	out.data[:, :, :3] = np.rint(c * 255).astype(np.uint8)
	return out

def linear_to_srgb(img: Image) -> Image:
	''' Encodes the RGB channels of an 8-bit linear image to sRGB. Alpha is untouched. '''
	out = img.copy()
	c = img.data[:, :, :3].astype(np.float32) / 255
	c = np.where(c <= 0.0031308, c * 12.92, 1.055 * (c ** (1 / 2.4)) - 0.055)
	out.data[:, :, :3] = np.rint(np.clip(c, 0, 1) * 255).astype(np.uint8)
	return out

def transfer(img: Image, srgb: bool, space: ColorSpace) -> Image:
	'''
	Returns pixels as seen through the requested read space. `srgb` describes
	how the source data is stored.
	'''
	if srgb == (space == ColorSpace.GammaCorrected):
		return img
	if srgb:
		return srgb_to_linear(img)
	return linear_to_srgb(img)


''' Channel conversions '''

def swizzle(src: Image, transform: tuple[np.ndarray, np.ndarray], out: Image):
	''' Writes M * src + bias into `out`, clamped to 8 bits. '''
	matrix, bias = transform
	rgba = src.normalize('RGBA').data.astype(np.int32)
	out.data[...] = np.clip(rgba @ matrix.T + bias, 0, 255).astype(np.uint8)

def blit(src: Image, out: Image):
	''' Copies src into `out` unchanged. '''
	out.data[...] = src.normalize('RGBA').data

def make_equirect(faces: list[Image], out: Image):
	''' Projects six cube faces (+X, -X, +Y, -Y, +Z, -Z) onto an equirectangular surface. '''

	width, height = out.size
	face_w, face_h = faces[0].size
	for i, face in enumerate(faces):
		assert face.size == (face_w, face_h), f'Expected cube face {i} to be {face_w}x{face_h}, but got {face.size}'

	lon = ((np.arange(width) + 0.5) / width * 2 - 1) * np.pi
	lat = (0.5 - (np.arange(height) + 0.5) / height) * np.pi
	lon, lat = np.meshgrid(lon, lat)

	x = np.cos(lat) * np.sin(lon)
	y = np.sin(lat)
	z = np.cos(lat) * np.cos(lon)
	ax, ay, az = np.abs(x), np.abs(y), np.abs(z)

	major_x = (ax >= ay) & (ax >= az)
	major_y = ~major_x & (ay >= az)
	face = np.where(major_x, np.where(x > 0, 0, 1),
			np.where(major_y, np.where(y > 0, 2, 3),
			np.where(z > 0, 4, 5)))

	selectors = [face == i for i in range(6)]
	sc = np.select(selectors, [-z,  z,  x,  x,  x, -x])
	tc = np.select(selectors, [-y, -y,  z, -z, -y, -y])
	ma = np.select([major_x, major_y], [ax, ay], az)

	px = np.clip(((sc / ma + 1) / 2 * face_w).astype(np.int64), 0, face_w - 1)
	py = np.clip(((tc / ma + 1) / 2 * face_h).astype(np.int64), 0, face_h - 1)

	stack = np.stack([f.normalize('RGBA').data for f in faces])
	out.data[...] = stack[face, py, px]

def output_size(source: Image|list[Image], mapType: TextureMapType) -> tuple[int, int]:
	if mapType == TextureMapType.CubeMap:
		assert isinstance(source, list) and len(source) == 6, 'Cubemap conversion expects six faces'
		width, height = source[0].size
		return (width * 2, height)
	assert isinstance(source, Image)
	return source.size

def convert(source: Image|list[Image], mapType: TextureMapType, pool: SurfacePool=surfaces) -> Image:
	''' Converts already-read source pixels to the RGBA8 layout glTF expects for the map type. '''

	size = output_size(source, mapType)
	with pool.temporary(size) as surface:
		match mapType:
			case TextureMapType.MetallicGloss:
				swizzle(source, METALLIC_GLOSS_SWIZZLE, surface)
			case TextureMapType.Bump:
				swizzle(source, NORMAL_SWIZZLE, surface)
			case TextureMapType.CubeMap:
				log.debug(f'Projecting cubemap to {size[0]}x{size[1]} equirect')
				make_equirect(source, surface)
			case _:
				blit(source, surface)

		return surface.copy()
