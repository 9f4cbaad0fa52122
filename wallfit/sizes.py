"""Common wallpaper sizes, in CSS pixels."""

from collections import namedtuple

WallpaperSize = namedtuple(
    'WallpaperSize', ('width', 'height', 'aspect_ratio', 'category'))

WALLPAPER_SIZES = {
    # Standard resolutions
    'SVGA': WallpaperSize(800, 600, '4:3', 'Standard'),
    'XGA': WallpaperSize(1024, 768, '4:3', 'Standard'),
    'WXGA': WallpaperSize(1280, 720, '16:9', 'Standard'),
    'SXGA': WallpaperSize(1280, 1024, '5:4', 'Standard'),
    'HD': WallpaperSize(1366, 768, '16:9', 'Standard'),
    'HD+': WallpaperSize(1600, 900, '16:9', 'Standard'),
    'UXGA': WallpaperSize(1600, 1200, '4:3', 'Standard'),
    'FHD': WallpaperSize(1920, 1080, '16:9', 'Standard'),
    'WUXGA': WallpaperSize(1920, 1200, '16:10', 'Standard'),

    # High resolutions
    'QHD': WallpaperSize(2560, 1440, '16:9', 'High Resolution'),
    'WQHD': WallpaperSize(3440, 1440, '21:9', 'High Resolution'),
    '4K UHD': WallpaperSize(3840, 2160, '16:9', 'High Resolution'),
    '5K': WallpaperSize(5120, 2880, '16:9', 'High Resolution'),
    '8K UHD': WallpaperSize(7680, 4320, '16:9', 'High Resolution'),

    # Apple Retina displays
    'MacBook Air 13': WallpaperSize(2560, 1600, '16:10', 'Apple Retina'),
    'MacBook Pro 13': WallpaperSize(2560, 1600, '16:10', 'Apple Retina'),
    'MacBook Pro 14': WallpaperSize(3024, 1964, '16:10', 'Apple Retina'),
    'MacBook Pro 16': WallpaperSize(3456, 2234, '16:10', 'Apple Retina'),
    'iMac 21.5': WallpaperSize(4096, 2304, '16:9', 'Apple Retina'),
    'iMac 27': WallpaperSize(5120, 2880, '16:9', 'Apple Retina'),

    # Ultrawide resolutions
    'UW-UXGA': WallpaperSize(2560, 1080, '21:9', 'Ultrawide'),
    'UW-QHD': WallpaperSize(3440, 1440, '21:9', 'Ultrawide'),
    'UW-5K2K': WallpaperSize(5120, 2160, '21:9', 'Ultrawide'),

    # Less common
    'WXGA+': WallpaperSize(1440, 900, '16:10', 'Other'),
    'WSXGA+': WallpaperSize(1680, 1050, '16:10', 'Other'),
    'WQXGA': WallpaperSize(2560, 1600, '16:10', 'Other'),
}


def get_size(name):
    """Return the :obj:`WallpaperSize` called ``name``, ignoring case."""
    for size_name, size in WALLPAPER_SIZES.items():
        if size_name.lower() == name.strip().lower():
            return size
    raise KeyError(f'Unknown wallpaper size: {name}')
