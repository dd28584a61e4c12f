"""
Тесты для bmp_writer.py
"""
import io
import os
import struct
import tempfile

import pytest

from bitmap import Bitmap, Color24
from bmp_format import (
    BMP_SIGNATURE,
    FILE_HEADER_FORMAT,
    FILE_HEADER_SIZE,
    HEADER_SIZE,
    INFO_HEADER_FORMAT,
    INFO_HEADER_SIZE,
    BitmapIOError,
    row_size,
)
from bmp_writer import BMPWriter, write_to_file


class TestBMPWriter:
    """Тесты для класса BMPWriter"""

    def test_init(self):
        """Тест инициализации BMPWriter"""
        bitmap = Bitmap(3, 2)
        writer = BMPWriter(bitmap)
        assert writer.width == 3
        assert writer.height == 2
        assert writer.bitmap is bitmap

    def test_header_formats_match_sizes(self):
        """Форматы struct соответствуют размерам заголовков"""
        assert struct.calcsize(FILE_HEADER_FORMAT) == FILE_HEADER_SIZE == 14
        assert struct.calcsize(INFO_HEADER_FORMAT) == INFO_HEADER_SIZE == 40

    def test_create_file_header(self):
        """Заголовок файла: сигнатура, размер, резерв, смещение"""
        header = BMPWriter(Bitmap(3, 2)).create_file_header()
        assert len(header) == 14
        assert header[:2] == BMP_SIGNATURE
        assert struct.unpack('<HIII', header) == (19778, 54 + 3 * 3 * 2, 0, 54)

    def test_create_info_header(self):
        """Информационный заголовок: 40 байт, planes и bpp одним полем"""
        header = BMPWriter(Bitmap(3, 2)).create_info_header()
        assert len(header) == 40
        size, width, height = struct.unpack('<III', header[:12])
        assert (size, width, height) == (40, 3, 2)
        # Смещения 26..34 в файле - 8-байтное поле planes | bpp << 16
        assert struct.unpack('<Q', header[12:20])[0] == 1572865
        assert struct.unpack('<I', header[20:24])[0] == 3 * 3 * 2
        assert header[24:] == b'\x00' * 16

    def test_prepare_image_data_bottom_up(self):
        """Строки пишутся снизу вверх, каналы в порядке (b, g, r)"""
        bitmap = Bitmap.from_rows([
            [(1, 2, 3)],
            [(4, 5, 6)],
        ])
        data = BMPWriter(bitmap).prepare_image_data()
        # Ширина 1: 3 байта пикселя + 1 байт выравнивания
        assert data == b'\x06\x05\x04\x00' + b'\x03\x02\x01\x00'

    @pytest.mark.parametrize('width', range(0, 9))
    def test_row_padding(self, width):
        """Длина каждой строки округляется вверх до кратной 4"""
        bitmap = Bitmap(width, 3)
        bitmap.fill(Color24(0xAA, 0xBB, 0xCC))
        data = BMPWriter(bitmap).prepare_image_data()
        stride = (3 * width + 3) // 4 * 4
        assert row_size(width) == stride
        assert len(data) == 3 * stride
        for y in range(3):
            row = data[y * stride:(y + 1) * stride]
            assert row[:3 * width] == b'\xcc\xbb\xaa' * width
            assert set(row[3 * width:]) <= {0}

    def test_to_bytes_layout(self):
        """Файл целиком: 54 байта заголовка и данные пикселей"""
        bitmap = Bitmap(2, 2)
        data = BMPWriter(bitmap).to_bytes()
        assert len(data) == HEADER_SIZE + 2 * row_size(2)
        assert struct.unpack('<I', data[10:14])[0] == 54
        assert struct.unpack('<I', data[18:22])[0] == 2
        assert struct.unpack('<I', data[22:26])[0] == 2

    def test_zero_width_has_no_pixel_data(self):
        """Изображение нулевой ширины не даёт байтов пикселей при любой высоте"""
        writer = BMPWriter(Bitmap(0, 10 ** 9))
        assert writer.prepare_image_data() == b''
        assert len(writer.to_bytes()) == HEADER_SIZE

    def test_write_stream(self):
        """Запись в открытый поток совпадает с to_bytes"""
        bitmap = Bitmap(3, 1)
        bitmap.fill((9, 8, 7))
        stream = io.BytesIO()
        BMPWriter(bitmap).write_stream(stream)
        assert stream.getvalue() == BMPWriter(bitmap).to_bytes()

    def test_write_bmp_file(self):
        """Тест записи BMP файла"""
        bitmap = Bitmap(4, 4)
        bitmap.point(1, 1, (255, 0, 0), size=2)

        with tempfile.NamedTemporaryFile(delete=False, suffix='.bmp') as f:
            temp_path = f.name

        try:
            write_to_file(bitmap, temp_path)

            assert os.path.exists(temp_path)
            with open(temp_path, 'rb') as f:
                content = f.read()
            assert content[:2] == BMP_SIGNATURE
            assert content == BMPWriter(bitmap).to_bytes()
        finally:
            if os.path.exists(temp_path):
                os.unlink(temp_path)

    def test_write_unwritable_path(self):
        """Ошибка открытия файла не молчит"""
        missing_dir = os.path.join(tempfile.gettempdir(), f'missing_{os.urandom(8).hex()}')
        with pytest.raises(BitmapIOError):
            write_to_file(Bitmap(1, 1), os.path.join(missing_dir, 'out.bmp'))
        with pytest.raises(OSError):
            write_to_file(Bitmap(1, 1), os.path.join(missing_dir, 'out.bmp'))
