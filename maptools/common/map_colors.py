"""Minecraft map color palette.

Each byte of a map's ``colors`` array is a color index:

  bits 7-2: base color id (0-63), one of the material colors below
  bits 1-0: shade id (0-3), selects a brightness multiplier

R, G and B are scaled by ``multiplier / 255`` with integer truncation. Alpha is
copied from the base color unchanged, so shading never makes a pixel partially
transparent.

Reference: https://minecraft.wiki/w/Map_item_format#Map_colors
"""

import numpy as np

# https://minecraft.wiki/w/Map_item_format#Base_colors
MAP_BASE_COLORS = (
    (0, 0, 0, 0),          #  0: none (air, glass, rails, ...)
    (127, 178, 56, 255),   #  1: grass
    (247, 233, 163, 255),  #  2: sand
    (199, 199, 199, 255),  #  3: wool (cobweb, mushroom stem)
    (255, 0, 0, 255),      #  4: fire (lava, TNT)
    (160, 160, 255, 255),  #  5: ice
    (167, 167, 167, 255),  #  6: metal
    (0, 124, 0, 255),      #  7: plant
    (255, 255, 255, 255),  #  8: snow
    (164, 168, 184, 255),  #  9: clay
    (151, 109, 77, 255),   # 10: dirt
    (112, 112, 112, 255),  # 11: stone
    (64, 64, 255, 255),    # 12: water
    (143, 119, 72, 255),   # 13: wood
    (255, 252, 245, 255),  # 14: quartz
    (216, 127, 51, 255),   # 15: color_orange
    (178, 76, 216, 255),   # 16: color_magenta
    (102, 153, 216, 255),  # 17: color_light_blue
    (229, 229, 51, 255),   # 18: color_yellow
    (127, 204, 25, 255),   # 19: color_light_green
    (242, 127, 165, 255),  # 20: color_pink
    (76, 76, 76, 255),     # 21: color_gray
    (153, 153, 153, 255),  # 22: color_light_gray
    (76, 127, 153, 255),   # 23: color_cyan
    (127, 63, 178, 255),   # 24: color_purple
    (51, 76, 178, 255),    # 25: color_blue
    (102, 76, 51, 255),    # 26: color_brown
    (102, 127, 51, 255),   # 27: color_green
    (153, 51, 51, 255),    # 28: color_red
    (25, 25, 25, 255),     # 29: color_black
    (250, 238, 77, 255),   # 30: gold
    (92, 219, 213, 255),   # 31: diamond
    (74, 128, 255, 255),   # 32: lapis
    (0, 217, 58, 255),     # 33: emerald
    (129, 86, 49, 255),    # 34: podzol
    (112, 2, 0, 255),      # 35: nether
    (209, 177, 161, 255),  # 36: terracotta_white
    (159, 82, 36, 255),    # 37: terracotta_orange
    (149, 87, 108, 255),   # 38: terracotta_magenta
    (112, 108, 138, 255),  # 39: terracotta_light_blue
    (186, 133, 36, 255),   # 40: terracotta_yellow
    (103, 117, 53, 255),   # 41: terracotta_light_green
    (160, 77, 78, 255),    # 42: terracotta_pink
    (57, 41, 35, 255),     # 43: terracotta_gray
    (135, 107, 98, 255),   # 44: terracotta_light_gray
    (87, 92, 92, 255),     # 45: terracotta_cyan
    (122, 73, 88, 255),    # 46: terracotta_purple
    (76, 62, 92, 255),     # 47: terracotta_blue
    (76, 50, 35, 255),     # 48: terracotta_brown
    (76, 82, 42, 255),     # 49: terracotta_green
    (142, 60, 46, 255),    # 50: terracotta_red
    (37, 22, 16, 255),     # 51: terracotta_black
    (189, 48, 49, 255),    # 52: crimson_nylium
    (148, 63, 97, 255),    # 53: crimson_stem
    (92, 25, 29, 255),     # 54: crimson_hyphae
    (22, 126, 134, 255),   # 55: warped_nylium
    (58, 142, 140, 255),   # 56: warped_stem
    (86, 44, 62, 255),     # 57: warped_hyphae
    (20, 180, 133, 255),   # 58: warped_wart_block
    (100, 100, 100, 255),  # 59: deepslate
    (216, 175, 147, 255),  # 60: raw_iron
    (127, 167, 150, 255),  # 61: glow_lichen
    (0, 0, 0, 0),          # 62: unused
    (0, 0, 0, 0),          # 63: unused
)

# Shade ids 0-3: darker, dark, normal, light
MAP_COLOR_MULTIPLIERS = (180, 220, 255, 135)


def resolve_pixel(index):
    """Resolve a map color index (0-255) to an (R, G, B, A) tuple."""
    if not 0 <= index <= 255:
        raise ValueError(f"Map color index out of range: {index}")

    r, g, b, a = MAP_BASE_COLORS[index // 4]
    m = MAP_COLOR_MULTIPLIERS[index % 4]
    return (r * m // 255, g * m // 255, b * m // 255, a)


def build_palette():
    """Build the full 256-entry RGBA lookup table as a (256, 4) uint8 array."""
    return np.array([resolve_pixel(i) for i in range(256)], dtype=np.uint8)


MAP_PALETTE = build_palette()
MAP_PALETTE.setflags(write=False)


def colors_to_rgba(colors, side):
    """Map a row-major grid of color indices to a (side, side, 4) RGBA array.

    ``colors`` is any bytes-like object of exactly ``side * side`` indices.
    """
    indices = np.frombuffer(bytes(colors), dtype=np.uint8)
    if indices.size != side * side:
        raise ValueError(
            f"Color grid has {indices.size} entries, expected {side * side} "
            f"for a {side}x{side} map"
        )
    return MAP_PALETTE[indices].reshape(side, side, 4)
