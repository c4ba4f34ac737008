"""
Per-instance strings needed by the pipeline itself.

The full UI translation tables live with the renderer; this module only
holds what titles, meta descriptions and placeholders are built from.
Missing keys fall back to English.
"""

from __future__ import annotations

from typing import Any

from ..core.types import Instance


STRINGS: dict[str, dict[str, Any]] = {
    "en": {
        "title": "learn with Serlo!",
        "topic_title_affix": "Basics & exercises",
        "entities": {
            "applet": "Applet",
            "article": "Article",
            "course": "Course",
            "course_page": "Course Page",
            "event": "Event",
            "exercise": "Exercise",
            "exercise_group": "Exercise group",
            "folder": "Folder",
            "page": "Page",
            "revision": "Revision",
            "topic": "Topic",
            "video": "Video",
        },
        "meta_descriptions": {
            "default": "Serlo is the free learning platform with explanations, exercises and videos.",
            "topic": "Explanations, videos and exercises on this topic at Serlo.",
            "topic-folder": "Exercises with solutions on this topic at Serlo.",
            "text-exercise": "An exercise with a step-by-step solution at Serlo.",
            "groupedexercise": "An exercise with a step-by-step solution at Serlo.",
            "exercisegroup": "Exercises with step-by-step solutions at Serlo.",
        },
        "user_description_placeholder": "This is where we display the description on the production server.",
    },
    "de": {
        "title": "lernen mit Serlo!",
        "topic_title_affix": "Grundlagen & Übungen",
        "entities": {
            "applet": "Applet",
            "article": "Artikel",
            "course": "Kurs",
            "course_page": "Kursseite",
            "event": "Veranstaltung",
            "exercise": "Aufgabe",
            "exercise_group": "Aufgabengruppe",
            "folder": "Ordner",
            "page": "Seite",
            "revision": "Bearbeitung",
            "topic": "Thema",
            "video": "Video",
        },
        "meta_descriptions": {
            "default": "Serlo ist die freie Lernplattform mit Erklärungen, Übungsaufgaben und Videos.",
            "topic": "Erklärungen, Videos und Übungsaufgaben zu diesem Thema auf Serlo.",
            "topic-folder": "Übungsaufgaben mit Lösungen zu diesem Thema auf Serlo.",
            "text-exercise": "Eine Übungsaufgabe mit Schritt-für-Schritt-Lösung auf Serlo.",
            "groupedexercise": "Eine Übungsaufgabe mit Schritt-für-Schritt-Lösung auf Serlo.",
            "exercisegroup": "Übungsaufgaben mit Schritt-für-Schritt-Lösungen auf Serlo.",
        },
        "user_description_placeholder": "Hier wird auf dem Produktivserver die Beschreibung angezeigt.",
    },
    "es": {
        "title": "¡aprende con Serlo!",
        "entities": {
            "article": "Artículo",
            "course": "Curso",
            "exercise": "Ejercicio",
            "topic": "Tema",
            "video": "Vídeo",
        },
    },
    "fr": {
        "title": "apprendre avec Serlo!",
        "entities": {
            "article": "Article",
            "course": "Cours",
            "exercise": "Exercice",
            "topic": "Thème",
            "video": "Vidéo",
        },
    },
    "hi": {
        "title": "सेर्लो के साथ सीखें!",
        "entities": {
            "applet": "एप्लेट",
            "article": "लेख",
            "course": "पाठ्यक्रम",
            "course_page": "अध्ययन पृष्ठ",
            "event": "कार्यक्रम",
            "exercise": "अभ्यास",
            "exercise_group": "व्यायाम समूह",
            "folder": "फोल्डर",
            "page": "पृष्ठ",
            "revision": "संशोधन",
            "topic": "विषय",
            "video": "वीडियो",
        },
    },
    "ta": {
        "title": "Serlo உடன் கற்றுக்கொள்ளுங்கள்!",
        "entities": {
            "article": "கட்டுரை",
            "exercise": "பயிற்சி",
            "topic": "தலைப்பு",
        },
    },
}


def get_string(instance: Instance | str, key: str, *path: str) -> str:
    """Look up a string for an instance, falling back to English.

    Examples:
        >>> get_string("de", "title")
        'lernen mit Serlo!'
        >>> get_string("ta", "entities", "video")
        'Video'
    """
    lang = instance.value if isinstance(instance, Instance) else instance
    for table in (STRINGS.get(lang, {}), STRINGS["en"]):
        value: Any = table.get(key)
        for part in path:
            value = value.get(part) if isinstance(value, dict) else None
        if isinstance(value, str):
            return value
    return ""


def entity_meta_description(instance: Instance | str, content_type: str) -> str:
    """Fallback meta description for a content type."""
    return get_string(instance, "meta_descriptions", content_type) or get_string(
        instance, "meta_descriptions", "default"
    )
