# core/pixel_buffer.py
import numpy as np

# Three float32 channels per texel (linear HDR radiance).
CHANNELS = 3
TEXEL_SIZE = CHANNELS * 4
ROW_ALIGNMENT = 32


def align_row(num_bytes: int, alignment: int = ROW_ALIGNMENT) -> int:
    return (num_bytes + alignment - 1) & ~(alignment - 1)


class PixelBuffer:
    """
    A rectangular buffer of float RGB texels addressed through a byte stride.

    The bytes live in a flat uint8 numpy array. A buffer created with subset()
    shares the storage of its parent and only records where its (0, 0) texel
    starts, so writes through either buffer are visible in both.
    """
    def __init__(self, storage: np.ndarray = None, width: int = 0, height: int = 0,
                 bytes_per_row: int = 0, bytes_per_pixel: int = TEXEL_SIZE, offset: int = 0):
        if storage is None:
            storage = np.zeros(0, dtype=np.uint8)
        self.storage = storage
        self.width = width
        self.height = height
        self.bytes_per_row = bytes_per_row
        self.bytes_per_pixel = bytes_per_pixel
        self.offset = offset
        self.owns_storage = offset == 0

    @classmethod
    def allocate(cls, width: int, height: int, bytes_per_row: int = None,
                 bytes_per_pixel: int = TEXEL_SIZE, padding: int = 0) -> "PixelBuffer":
        """
        Allocate a zero-initialized buffer.

        Args:
            width, height: Size in texels.
            bytes_per_row: Row stride. Defaults to the padded row size rounded up
                to ROW_ALIGNMENT.
            bytes_per_pixel: Texel size in bytes.
            padding: Extra columns and rows reserved past the visible area.

        Returns:
            PixelBuffer owning its storage.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Invalid buffer size {width}x{height}")
        min_row = (width + padding) * bytes_per_pixel
        if bytes_per_row is None:
            bytes_per_row = align_row(min_row)
        if bytes_per_row < min_row:
            raise ValueError(f"Row stride {bytes_per_row} is smaller than one row ({min_row} bytes)")
        storage = np.zeros(bytes_per_row * (height + padding), dtype=np.uint8)
        return cls(storage, width, height, bytes_per_row, bytes_per_pixel)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Wrap decoded (height, width, 3) pixel data into a newly allocated buffer."""
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise ValueError(f"Expected a (height, width, {CHANNELS}) array, got {array.shape}")
        height, width = array.shape[:2]
        image = cls.allocate(width, height)
        image.texels[...] = array
        return image

    def is_empty(self) -> bool:
        return self.storage.size == 0

    def _view(self, width: int, height: int) -> np.ndarray:
        if self.bytes_per_pixel % 4:
            raise ValueError(f"Texel size {self.bytes_per_pixel} is not a multiple of 4 bytes")
        last = self.offset + max(height - 1, 0) * self.bytes_per_row + width * self.bytes_per_pixel
        if height and last > self.storage.size:
            raise ValueError(
                f"A {width}x{height} view at offset {self.offset} exceeds the {self.storage.size} byte storage")
        return np.ndarray(shape=(height, width, self.bytes_per_pixel // 4), dtype=np.float32,
                          buffer=self.storage, offset=self.offset,
                          strides=(self.bytes_per_row, self.bytes_per_pixel, 4))

    @property
    def texels(self) -> np.ndarray:
        """Writable (height, width, channels) float32 view of the visible texels."""
        return self._view(self.width, self.height)

    @property
    def padded_texels(self) -> np.ndarray:
        """Same as texels, plus the padding column and row used for seamless filtering."""
        return self._view(self.width + 1, self.height + 1)

    def pixel_ref(self, x: int, y: int) -> np.ndarray:
        """Writable view of the texel at (x, y)."""
        return np.ndarray(shape=(self.bytes_per_pixel // 4,), dtype=np.float32, buffer=self.storage,
                          offset=self.offset + y * self.bytes_per_row + x * self.bytes_per_pixel)

    def subset(self, x: int, y: int, width: int, height: int) -> "PixelBuffer":
        """
        Create a view of the rectangle (x, y, width, height) of this buffer.
        The view shares storage and row stride with its parent.
        """
        if x < 0 or y < 0 or x + width > self.width or y + height > self.height:
            raise ValueError(
                f"Subset ({x}, {y}, {width}x{height}) lies outside the {self.width}x{self.height} parent")
        view = PixelBuffer(self.storage, width, height, self.bytes_per_row, self.bytes_per_pixel,
                           self.offset + y * self.bytes_per_row + x * self.bytes_per_pixel)
        view.owns_storage = False
        return view

    def swap(self, other: "PixelBuffer"):
        self.__dict__, other.__dict__ = other.__dict__, self.__dict__

    def take(self) -> "PixelBuffer":
        """Move the contents into a new buffer and leave this one empty."""
        moved = PixelBuffer()
        self.swap(moved)
        return moved

    def to_array(self) -> np.ndarray:
        return np.array(self.texels)

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height}, stride={self.bytes_per_row})"


def copy_image(dst: PixelBuffer, src: PixelBuffer):
    """
    Copy src into the top-left corner of dst, row by row, honoring the stride
    of each buffer.
    """
    if dst.width < src.width or dst.height < src.height:
        raise ValueError(
            f"Destination {dst.width}x{dst.height} is smaller than source {src.width}x{src.height}")
    if dst.bytes_per_pixel != src.bytes_per_pixel:
        raise ValueError(f"Texel size mismatch: {dst.bytes_per_pixel} != {src.bytes_per_pixel}")
    dst_texels = dst.texels
    src_texels = src.texels
    for y in range(src.height):
        dst_texels[y, :src.width] = src_texels[y]
