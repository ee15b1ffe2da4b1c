"""Localized strings for API responses, keyed by message key then locale."""
from fastapi import Query

from lemerle_api.core.config import settings
from lemerle_api.core.errors import ValidationError

LOCALES: tuple[str, ...] = ("fr", "en", "ar")
RTL_LOCALES = frozenset({"ar"})

MESSAGES: dict[str, dict[str, str]] = {
    # Booking
    "appointment_booked": {
        "fr": "Votre rendez-vous a été réservé avec succès !",
        "en": "Your appointment has been booked successfully!",
        "ar": "تم حفظ موعدك بنجاح!",
    },
    "invalid_datetime_format": {
        "fr": "Date ou heure invalide. Utilisez le format AAAA-MM-JJ et HH:MM.",
        "en": "Invalid date or time. Use the YYYY-MM-DD and HH:MM formats.",
        "ar": "تاريخ أو وقت غير صالح. استخدم الصيغة YYYY-MM-DD و HH:MM.",
    },
    "past_date": {
        "fr": "Impossible de sélectionner une date passée.",
        "en": "You cannot select a date in the past.",
        "ar": "لا يمكن اختيار تاريخ مضى.",
    },
    "invalid_datetime": {
        "fr": "Veuillez sélectionner une date et une heure valides (lundi-vendredi 8h-17h, samedi 8h-12h).",
        "en": "Please select a valid date and time (Monday-Friday 8:00-17:00, Saturday 8:00-12:00).",
        "ar": "يرجى اختيار تاريخ ووقت صالحين (الإثنين-الجمعة 8:00-17:00، السبت 8:00-12:00).",
    },
    "slot_taken": {
        "fr": "Cet horaire est déjà réservé. Veuillez choisir un autre.",
        "en": "This time slot is already reserved. Please choose another.",
        "ar": "هذا الوقت محجوز بالفعل. يرجى اختيار وقت آخر.",
    },
    # Generic
    "invalid_payload": {
        "fr": "Requête invalide. Vérifiez les champs du formulaire.",
        "en": "Invalid request. Please check the form fields.",
        "ar": "طلب غير صالح. يرجى التحقق من حقول النموذج.",
    },
    "invalid_language": {
        "fr": "Langue non prise en charge.",
        "en": "Invalid language.",
        "ar": "لغة غير مدعومة.",
    },
    "store_error": {
        "fr": "Une erreur s'est produite. Veuillez réessayer.",
        "en": "An error occurred. Please try again.",
        "ar": "حدث خطأ. يرجى المحاولة مرة أخرى.",
    },
    "internal_error": {
        "fr": "Erreur interne du serveur.",
        "en": "Internal server error.",
        "ar": "خطأ داخلي في الخادم.",
    },
    # Contact form
    "contact_required": {
        "fr": "Le nom, l'email et le message sont obligatoires.",
        "en": "Name, email, and message are required.",
        "ar": "الاسم والبريد الإلكتروني والرسالة مطلوبة.",
    },
    # Reviews
    "testimonial_required": {
        "fr": "Le témoignage, l'auteur et la note sont obligatoires.",
        "en": "Quote, author, and star rating are required.",
        "ar": "الشهادة والكاتب والتقييم مطلوبة.",
    },
    "invalid_star": {
        "fr": "La note doit être comprise entre 1 et 5.",
        "en": "Star rating must be between 1 and 5.",
        "ar": "يجب أن يكون التقييم بين 1 و 5.",
    },
    "services_title": {"fr": "Nos services", "en": "Our Services", "ar": "خدماتنا"},
    "services_subtitle": {
        "fr": "Découvrez nos services de haute qualité",
        "en": "Discover our high-quality services",
        "ar": "اكتشف خدماتنا عالية الجودة",
    },
    "testimonials_title": {"fr": "Témoignages", "en": "Testimonials", "ar": "شهادات"},
    "testimonials_subtitle": {
        "fr": "Ce que nos clients disent de nous",
        "en": "What our clients say about us",
        "ar": "ماذا يقول عملاؤنا عنا",
    },
    # Chat widget
    "chat_invalid_messages": {
        "fr": "Format de conversation invalide.",
        "en": "Invalid input format.",
        "ar": "تنسيق المحادثة غير صالح.",
    },
    "chat_unavailable": {
        "fr": "L'assistant est momentanément indisponible.",
        "en": "The assistant is currently unavailable.",
        "ar": "المساعد غير متاح حاليًا.",
    },
    "chat_upstream_error": {
        "fr": "L'assistant n'a pas pu répondre. Veuillez réessayer.",
        "en": "The assistant could not answer. Please try again.",
        "ar": "تعذر على المساعد الرد. يرجى المحاولة مرة أخرى.",
    },
    "chat_system_prompt": {
        "fr": "Vous êtes un assistant utile pour {site_name}. Soyez concis et serviable. Répondez en français.",
        "en": "You are a helpful assistant for {site_name}. Be concise and helpful. Answer in English.",
        "ar": "أنت مساعد مفيد لـ {site_name}. كن موجزًا ومفيدًا. أجب باللغة العربية.",
    },
    "chat_history_header": {
        "fr": "Historique de la conversation:",
        "en": "Conversation history:",
        "ar": "سجل المحادثة:",
    },
    "chat_role_user": {"fr": "Utilisateur", "en": "User", "ar": "المستخدم"},
    "chat_role_assistant": {"fr": "Assistant", "en": "Assistant", "ar": "المساعد"},
}


class CatalogError(RuntimeError):
    pass


def check_catalog(messages: dict[str, dict[str, str]] | None = None) -> None:
    """Raise CatalogError if any message key lacks a non-empty entry for a supported locale."""
    catalog = MESSAGES if messages is None else messages
    missing = [
        f"{key}.{locale}"
        for key, entries in catalog.items()
        for locale in LOCALES
        if not entries.get(locale)
    ]
    if missing:
        raise CatalogError(f"Missing translations: {', '.join(sorted(missing))}")
    if settings.default_locale not in LOCALES:
        raise CatalogError(f"default_locale {settings.default_locale!r} is not one of {LOCALES}")


def translate(key: str, locale: str, **params: object) -> str:
    entries = MESSAGES[key]
    text = entries.get(locale) or entries[settings.default_locale]
    return text.format(**params) if params else text


def is_rtl(locale: str) -> bool:
    return locale in RTL_LOCALES


def get_locale(lang: str | None = Query(None, alias="lang")) -> str:
    """Resolve ?lang= to a supported locale; unknown tags are a 400."""
    if lang is None:
        return settings.default_locale
    lang = lang.lower()
    if lang not in LOCALES:
        raise ValidationError("invalid_language")
    return lang


def locale_from_request(query_lang: str | None) -> str:
    """Best-effort locale for error responses; never raises."""
    if query_lang and query_lang.lower() in LOCALES:
        return query_lang.lower()
    return settings.default_locale
