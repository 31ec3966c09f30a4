"""Simple two-language (en/ar) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "en": "IftarSky",
        "ar": "سماء الإفطار",
    },
    "label_now": {
        "en": "Time",
        "ar": "الوقت",
    },
    "label_suhoor": {
        "en": "Suhoor ends (Fajr)",
        "ar": "نهاية السحور (الفجر)",
    },
    "label_iftar": {
        "en": "Iftar (Maghrib)",
        "ar": "الإفطار (المغرب)",
    },
    "label_day": {
        "en": "Day of the month",
        "ar": "يوم الشهر",
    },
    "label_city": {
        "en": "City",
        "ar": "المدينة",
    },
    "label_model": {
        "en": "Phone",
        "ar": "الهاتف",
    },
    "label_layout": {
        "en": "Day dots",
        "ar": "نقاط الأيام",
    },
    "btn_save_png": {
        "en": "↓ PNG",
        "ar": "↓ PNG",
    },
    "btn_save_svg": {
        "en": "↓ SVG",
        "ar": "↓ SVG",
    },
    "error_input": {
        "en": "Could not build the wallpaper. ({error})",
        "ar": "تعذّر إنشاء الخلفية. ({error})",
    },
    "arc_suhoor_end": {
        "en": "SUHOOR ENDS IN",
        "ar": "ينتهي السحور بعد",
    },
    "arc_iftar": {
        "en": "UNTIL IFTAR",
        "ar": "حتى الإفطار",
    },
    "arc_next_suhoor": {
        "en": "UNTIL SUHOOR",
        "ar": "حتى السحور",
    },
    "sub_suhoor_end": {
        "en": "eat before fajr",
        "ar": "تسحّروا قبل الفجر",
    },
    "sub_iftar": {
        "en": "hold strong",
        "ar": "اصبروا",
    },
    "sub_next_suhoor": {
        "en": "rest & recharge",
        "ar": "استريحوا",
    },
    "panel_suhoor": {
        "en": "SUHOOR",
        "ar": "السحور",
    },
    "panel_iftar": {
        "en": "IFTAR",
        "ar": "الإفطار",
    },
    "caption_left": {
        "en": "{remaining} left",
        "ar": "متبقي {remaining}",
    },
    "caption_tomorrow": {
        "en": "tomorrow",
        "ar": "غداً",
    },
    "caption_completed": {
        "en": "completed ✓",
        "ar": "اكتمل ✓",
    },
    "day_label": {
        "en": "Day {day} · {phase}",
        "ar": "اليوم {day} · {phase}",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
