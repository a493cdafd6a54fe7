from pygltflib import Sampler
from .enums import WrapMode, FilterMode, GLTFWrapMode, MinFilterMode, MagFilterMode
from .texture import Texture
import logging as log

def wrap_mode(texture: Texture) -> GLTFWrapMode:
	match texture.wrapMode:
		case WrapMode.Clamp:	return GLTFWrapMode.ClampToEdge
		case WrapMode.Repeat:	return GLTFWrapMode.Repeat
		case WrapMode.Mirror:	return GLTFWrapMode.MirroredRepeat
		case mode:
			log.warning(f'Unsupported wrap mode {mode!r} on {texture}, falling back to Repeat')
			return GLTFWrapMode.Repeat

def filter_modes(texture: Texture) -> tuple[MinFilterMode, MagFilterMode]:
	''' Returns the (min, mag) filter pair. Mipmapped filters are only used when mips exist. '''

	if texture.mipmapCount > 1:
		match texture.filterMode:
			case FilterMode.Point:		return (MinFilterMode.NearestMipmapNearest, MagFilterMode.Nearest)
			case FilterMode.Bilinear:	return (MinFilterMode.LinearMipmapNearest, MagFilterMode.Linear)
			case FilterMode.Trilinear:	return (MinFilterMode.LinearMipmapLinear, MagFilterMode.Linear)
			case mode:
				log.warning(f'Unsupported filter mode {mode!r} on {texture}, falling back to Trilinear')
				return (MinFilterMode.LinearMipmapLinear, MagFilterMode.Linear)

	if texture.filterMode == FilterMode.Point:
		return (MinFilterMode.Nearest, MagFilterMode.Nearest)
	return (MinFilterMode.Linear, MagFilterMode.Linear)

def make_sampler(texture: Texture) -> Sampler:
	wrap = wrap_mode(texture)
	min_filter, mag_filter = filter_modes(texture)
	return Sampler(
		wrapS=int(wrap),
		wrapT=int(wrap),
		minFilter=int(min_filter),
		magFilter=int(mag_filter))
