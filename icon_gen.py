"""Generate the date-picker button icon (PIL Image, in-memory)."""

from PIL import Image, ImageDraw, ImageFont

ACCENT = "#0078D4"


def _fit_font(draw: ImageDraw.ImageDraw, text: str, max_w: int, max_h: int):
    """Return the largest font whose rendering of ``text`` fits the box."""
    font_size = max_h * 2
    font = None
    while font_size > 6:
        try:
            font = ImageFont.truetype("DejaVuSans-Bold.ttf", font_size)
        except OSError:
            return ImageFont.load_default()
        bbox = draw.textbbox((0, 0), text, font=font)
        if bbox[2] - bbox[0] <= max_w and bbox[3] - bbox[1] <= max_h:
            break
        font_size -= 1
    return font


def create_icon_image(day: int, size: int = 24) -> Image.Image:
    """Return a ``size``×``size`` RGBA calendar leaf showing ``day``.

    A coloured header band sits on top of a white page with the day number
    centred below it.
    """
    img = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    header_h = max(2, size // 4)
    draw.rectangle((0, 0, size - 1, size - 1), fill="white", outline="#555555")
    draw.rectangle((0, 0, size - 1, header_h), fill=ACCENT)

    text = str(day)
    body_h = size - header_h - 2
    font = _fit_font(draw, text, size - 4, body_h - 2)

    # Centre the visible pixels inside the page body
    bbox = draw.textbbox((0, 0), text, font=font)
    x = (size - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = header_h + 1 + (body_h - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill="black", font=font)

    return img
