"""Response message translations.

Language is taken from the ``X-Language`` header, then from the primary
subtag of ``Accept-Language``; anything unsupported falls back to Russian.
"""

from typing import Callable, Mapping

from app.core.config import settings

SUPPORTED_LANGUAGES = ("ru", "en", "uz")

TRANSLATIONS: dict[str, dict[str, str]] = {
    "ru": {
        "internalServerError": "Внутренняя ошибка сервера",
        "unauthorized": "Необходима авторизация",
        "forbidden": "Доступ запрещён",
        "badRequest": "Неверный запрос",
        "validationError": "Ошибка валидации",
        "productNotFound": "Товар не найден",
        "insufficientStock": "Недостаточно товара на складе",
        "orderCreated": "Заказ создан",
        "orderUpdated": "Заказ обновлён",
        "orderNotFound": "Заказ не найден",
        "invalidDates": "Неверные даты аренды",
        "addressRequired": "Укажите адрес доставки",
        "minRentalDays": "Минимальный срок аренды - 1 день",
        "tooManyRequests": "Слишком много запросов",
    },
    "en": {
        "internalServerError": "Internal server error",
        "unauthorized": "Authorization required",
        "forbidden": "Access denied",
        "badRequest": "Bad request",
        "validationError": "Validation error",
        "productNotFound": "Product not found",
        "insufficientStock": "Insufficient stock",
        "orderCreated": "Order created",
        "orderUpdated": "Order updated",
        "orderNotFound": "Order not found",
        "invalidDates": "Invalid rental dates",
        "addressRequired": "Delivery address required",
        "minRentalDays": "Minimum rental period is 1 day",
        "tooManyRequests": "Too many requests",
    },
    "uz": {
        "internalServerError": "Ichki server xatosi",
        "unauthorized": "Avtorizatsiya talab qilinadi",
        "forbidden": "Ruxsat yo'q",
        "badRequest": "Noto'g'ri so'rov",
        "validationError": "Tekshirish xatosi",
        "productNotFound": "Mahsulot topilmadi",
        "insufficientStock": "Omborda yetarli mahsulot yo'q",
        "orderCreated": "Buyurtma yaratildi",
        "orderUpdated": "Buyurtma yangilandi",
        "orderNotFound": "Buyurtma topilmadi",
        "invalidDates": "Noto'g'ri ijara sanalari",
        "addressRequired": "Yetkazib berish manzilini kiriting",
        "minRentalDays": "Minimal ijara muddati - 1 kun",
        "tooManyRequests": "So'rovlar juda ko'p",
    },
}

Translator = Callable[[str], str]


def get_language(headers: Mapping[str, str]) -> str:
    """Resolve the response language from request headers."""
    lang = headers.get("x-language")
    if lang and lang in SUPPORTED_LANGUAGES:
        return lang

    accept_language = headers.get("accept-language")
    if accept_language:
        primary = accept_language.split(",")[0].split("-")[0].strip().lower()
        if primary in SUPPORTED_LANGUAGES:
            return primary

    return settings.DEFAULT_LANGUAGE


def translate(key: str, language: str | None = None) -> str:
    """Translate a message key, falling back to Russian and then the key itself."""
    default = TRANSLATIONS["ru"]
    table = TRANSLATIONS.get(language or settings.DEFAULT_LANGUAGE, default)
    return table.get(key) or default.get(key) or key


def create_translator(headers: Mapping[str, str]) -> Translator:
    language = get_language(headers)
    return lambda key: translate(key, language)
