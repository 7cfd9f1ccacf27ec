"""
Pytest configuration for local imports and shared image fixtures.
"""

# Standard Library
import io
import os
import sys

# PIP3 modules
import PIL.Image
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
def encode_image(image: PIL.Image.Image, fmt: str = "PNG") -> bytes:
	"""
	Encode a Pillow image to bytes.

	Args:
		image: Source image.
		fmt: Pillow format name.

	Returns:
		Encoded bytes.
	"""
	buffer = io.BytesIO()
	image.save(buffer, format=fmt)
	return buffer.getvalue()


@pytest.fixture
def make_image_bytes():
	"""
	Factory fixture: encode a Pillow image to PNG or JPEG bytes.
	"""
	return encode_image


@pytest.fixture
def red_png() -> bytes:
	return encode_image(PIL.Image.new("RGB", (32, 32), (255, 0, 0)))


@pytest.fixture
def blue_jpeg() -> bytes:
	return encode_image(PIL.Image.new("RGB", (48, 24), (0, 0, 255)), "JPEG")
