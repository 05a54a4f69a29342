"""
缩略图 Prompt 拼装
"""
from types import MappingProxyType
from typing import Optional

from thumbnail_studio.services.errors import InvalidGenerationOptionError

STYLE_PROMPTS = MappingProxyType({
    "Bold & Graphic": (
        "eye-catching thumbnail, bold typography, vibrant colors, expressive facial reaction, "
        "dramatic lighting, high contrast, click-worthy composition, professional style"
    ),
    "Tech/Futuristic": (
        "futuristic thumbnail, sleek modern design, digital UI elements, glowing accents, "
        "holographic effects, cyber-tech aesthetic, sharp lighting, high-tech atmosphere"
    ),
    "Minimalist": (
        "minimalist thumbnail, clean layout, simple shapes, limited color palette, "
        "plenty of negative space, modern flat design, clear focal point"
    ),
    "Photorealistic": (
        "photorealistic thumbnail, ultra-realistic lighting, natural skin tones, candid moment, "
        "DSLR-style photography, lifestyle realism, shallow depth of field"
    ),
    "Illustrated": (
        "illustrated thumbnail, custom digital illustration, stylized characters, bold outlines, "
        "vibrant colors, creative cartoon or vector art style"
    ),
})

COLOR_SCHEME_DESCRIPTIONS = MappingProxyType({
    "vibrant": "vibrant and energetic colors, high saturation, bold contrasts, eye-catching palette",
    "sunset": "warm sunset tones, orange pink and purple hues, soft gradients, cinematic glow",
    "forest": "natural green tones, earthy colors, calm and organic palette, fresh atmosphere",
    "neon": "neon glow effects, electric blues and pinks, cyberpunk lighting, high contrast glow",
    "purple": "purple-dominant color palette, magenta and violet tones, modern and stylish mood",
    "monochrome": "black and white color scheme, high contrast, dramatic lighting, timeless aesthetic",
    "ocean": "cool blue and teal tones, aquatic color palette, fresh and clean atmosphere",
    "pastel": "soft pastel colors, low saturation, gentle tones, calm and friendly aesthetic",
})

ASPECT_RATIOS = ("16:9", "1:1", "9:16")

_CLICK_THROUGH_SUFFIX = (
    "Make it visually stunning and designed to maximize click-through rate. "
    "Bold, professional, and impossible to ignore."
)


def compose_prompt(
    title: str,
    style: str,
    aspect_ratio: str,
    color_scheme: Optional[str] = None,
    user_prompt: Optional[str] = None,
) -> str:
    """
    拼装发送给文生图模型的 Prompt

    顺序固定：风格描述 + 标题 → 配色 → 用户补充 → 宽高比与点击率引导

    Args:
        title: 视频标题
        style: 风格，必须是 STYLE_PROMPTS 中的键
        aspect_ratio: 宽高比，仅作为文字提示
        color_scheme: 配色方案（可选）
        user_prompt: 用户补充描述（可选）

    Returns:
        完整 Prompt

    Raises:
        InvalidGenerationOptionError: 标题为空，或风格/配色不在预设表中
    """
    if not title or not title.strip():
        raise InvalidGenerationOptionError("Title is required")

    style_description = STYLE_PROMPTS.get(style)
    if style_description is None:
        raise InvalidGenerationOptionError(f"Unsupported style: {style}", style=style)

    prompt = f'Create a {style_description} for: "{title}" '

    if color_scheme:
        color_description = COLOR_SCHEME_DESCRIPTIONS.get(color_scheme)
        if color_description is None:
            raise InvalidGenerationOptionError(
                f"Unsupported color scheme: {color_scheme}", color_scheme=color_scheme
            )
        prompt += f"Use a {color_description} color scheme. "

    if user_prompt:
        prompt += f"Additional details: {user_prompt} "

    # 免费接口会忽略尺寸参数，比例只能写进 Prompt
    prompt += f"Compose the image for a {aspect_ratio} aspect ratio. {_CLICK_THROUGH_SUFFIX}"
    return prompt
