"""
Statische Skill-Registry für die LQA-Analyse.

- GENERAL_SKILLS: universelle Prinzipien, immer injiziert (bis auf
  sprachgebundene Skills, siehe applies_to)
- SCENE_SKILLS: spezialisierte Heuristiken pro SceneType, in Registrierungsreihenfolge

Beide Strukturen sind unveränderlich und werden von beliebig vielen
parallelen Pipelines gelesen.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

from lqa.services.skills.skill_models import SceneType, Skill


def _is_german(target_language: str) -> bool:
    return target_language.lower().startswith("de")


GENERAL_SKILLS: Tuple[Skill, ...] = (
    Skill(
        name="text_expansion_guard",
        principle=(
            "German text is typically 30-40% longer than English; French is 15-20% longer. "
            "Prioritize checking short UI elements (buttons, tabs, labels, menu items) for truncation."
        ),
        when_to_apply="Always. This is the #1 source of visual bugs in localization.",
        examples=(
            "'Settings' → 'Einstellungen' (+60%)",
            "'Submit' → 'Soumettre' (+40%)",
            "'OK' → 'OK' (no expansion, skip)",
        ),
    ),
    Skill(
        name="compound_word_detection",
        principle=(
            "German forms very long compound nouns (e.g., 'Datenschutzgrundverordnung'). "
            "If a compound exceeds the width of its container in the source UI, flag it as a Layout issue "
            "and suggest hyphenation, abbreviation, or a shorter synonym."
        ),
        when_to_apply="When target language is de-DE.",
        applies_to=_is_german,
    ),
    Skill(
        name="number_date_locale_format",
        principle=(
            "Check that numbers use locale-correct delimiters (DE: 1.234,56 / FR: 1 234,56) "
            "and dates follow locale conventions (DE: TT.MM.JJJJ / FR: JJ/MM/AAAA). "
            "Flag any remaining en-US formats (e.g., MM/DD/YYYY, 1,234.56) as Formatting issues."
        ),
        when_to_apply="Whenever numbers, currencies, or dates are visible in valid areas.",
        examples=(
            "EN '$1,234.56' should become DE '1.234,56 $' or '1.234,56 USD'",
            "EN '02/12/2026' should become DE '12.02.2026'",
        ),
    ),
    Skill(
        name="capitalization_conventions",
        principle=(
            "German capitalizes all nouns; French generally does not capitalize after the first word of a title. "
            "Flag deviations from locale norms as Style issues (Minor severity)."
        ),
        when_to_apply="When headings, labels, or button text are visible.",
    ),
    Skill(
        name="politeness_register",
        principle=(
            "Formal 'Sie' is standard in German business UIs; informal 'tu' is rare in French enterprise UIs. "
            "Flag inconsistent use of formal/informal register as Style issues."
        ),
        when_to_apply="When interactive text (prompts, instructions, error messages) is visible.",
    ),
    Skill(
        name="icon_text_alignment",
        principle=(
            "After text expansion, icon+text pairs may misalign. Check that icons and their labels "
            "remain visually paired. If expanded text pushes the icon off its natural position, report as Layout."
        ),
        when_to_apply="When icon+label combinations are visible in valid areas.",
    ),
    Skill(
        name="ui_layer_occlusion",
        principle=(
            "When a modal, dialog, popup, dropdown, or toast is visible, the page is split into "
            "foreground (the active overlay) and background (the dimmed/covered page). "
            "Text in the background that appears cut off or hidden is NOT a layout bug, it is "
            "normal UI layering. NEVER report occluded background text as Truncation, Layout Issue, "
            "or Translation Missing. Only inspect the foreground window and unoccluded background areas."
        ),
        when_to_apply="Whenever a floating overlay, modal, dialog, or popup is visible in the screenshot.",
        examples=(
            "Delete confirmation dialog covers a legal disclaimer → ignore the disclaimer text",
            "Dropdown menu overlaps a table row → do NOT flag the partially hidden row as truncated",
        ),
    ),
)


SCENE_SKILLS: Mapping[SceneType, Tuple[Skill, ...]] = MappingProxyType({
    SceneType.NAVIGATION: (
        Skill(
            name="nav_truncation_priority",
            principle=(
                "Navigation items have the tightest width constraints. "
                "If any nav label is truncated, suggest an abbreviated translation first, "
                "e.g., 'Berichte' instead of 'Berichterstattung'. "
                "Never suggest 'increase container width' for nav items, it is not feasible."
            ),
            when_to_apply="When screenshots contain top nav bars, side nav, or breadcrumbs.",
        ),
        Skill(
            name="nav_consistency",
            principle=(
                "All navigation labels should maintain consistent translation style. "
                "If 'Dashboard' is translated as 'Übersicht' in one place, it should not appear "
                "as 'Instrumententafel' elsewhere."
            ),
            when_to_apply="When multiple nav labels are visible.",
        ),
    ),
    SceneType.FORM: (
        Skill(
            name="form_label_overflow",
            principle=(
                "Form field labels sit next to input boxes. Expanded translations can overflow into the input area. "
                "Check each label-input pair for overlap. Suggest shorter labels or moving the label above the input."
            ),
            when_to_apply="When form fields with labels are visible.",
            examples=(
                "'First Name' → DE 'Vorname' ✓ (fits)",
                "'Payment Method' → DE 'Zahlungsmethode' (check if it overflows the label column)",
            ),
        ),
        Skill(
            name="placeholder_translation",
            principle=(
                "Input placeholder text should also be localized. If an English placeholder is visible in a "
                "target-language screenshot, it is an Untranslated issue (but remember the rule: ignore "
                "Untranslated, so DO NOT report it)."
            ),
            when_to_apply="When form inputs with visible placeholder text are present.",
        ),
        Skill(
            name="validation_message_check",
            principle=(
                "Error/validation messages need special attention: they must be fully translated and culturally "
                "appropriate. A validation message that says 'Eingabe ungültig' is better than a literal "
                "translation of 'Invalid input'."
            ),
            when_to_apply="When error states or validation messages are visible.",
        ),
    ),
    SceneType.DASHBOARD: (
        Skill(
            name="dashboard_card_density",
            principle=(
                "Dashboard cards and KPI tiles have fixed dimensions. Expanded text can cause card content "
                "to wrap awkwardly or push elements below the fold. Check each card for visual integrity."
            ),
            when_to_apply="When dashboard or analytics views with cards/tiles are visible.",
        ),
        Skill(
            name="chart_axis_labels",
            principle=(
                "Chart axis labels and legends are often auto-sized. Verify translated axis labels are not clipped. "
                "Suggest abbreviations for long axis labels (e.g., 'Umsatz' instead of 'Umsatzerlöse')."
            ),
            when_to_apply="When charts, graphs, or data visualizations are visible.",
        ),
    ),
    SceneType.MODAL: (
        Skill(
            name="modal_button_balance",
            principle=(
                "Modal dialogs typically have action buttons (OK/Cancel). In German, these expand significantly. "
                "Check that buttons don't overflow the modal footer or wrap to a new line. "
                "Suggest: 'Abbrechen' → 'Abbr.' if space is critical."
            ),
            when_to_apply="When modal dialogs, popups, or confirmation windows are visible.",
        ),
        Skill(
            name="modal_content_scroll",
            principle=(
                "Modal body content that expands due to translation may push content below the visible area. "
                "If the target modal appears significantly taller, flag as a Minor Layout issue."
            ),
            when_to_apply="When modals with substantial body text are visible.",
        ),
        Skill(
            name="modal_background_exclusion",
            principle=(
                "When a modal/dialog is the active foreground element, ALL background content is "
                "in an inactive state. Any text behind the modal that appears clipped, partially hidden, "
                "or visually incomplete must be treated as 'Occluded (Ignored)', not as a real issue. "
                "Focus your entire LQA analysis on the modal's title, body text, input fields, and action buttons."
            ),
            when_to_apply="When any modal, dialog, or overlay popup is the primary interactive element.",
            examples=(
                "Confirmation dialog covers page footer → footer text is NOT truncated, it is occluded",
                "Cookie consent banner overlaps sidebar → sidebar issues are NOT reportable",
            ),
        ),
    ),
    SceneType.TABLE: (
        Skill(
            name="table_header_truncation",
            principle=(
                "Table column headers are the most constrained UI elements. German translations almost always "
                "exceed English column widths. Prioritize abbreviation suggestions for every truncated header. "
                "Example: 'Beschreibung' → 'Beschr.' or 'Status' (keep as-is if same)."
            ),
            when_to_apply="When data tables with column headers are visible.",
        ),
        Skill(
            name="table_cell_wrapping",
            principle=(
                "If table cells wrap to multiple lines due to translation expansion, the row height increases "
                "inconsistently. Flag this as Minor Layout if it significantly impacts readability."
            ),
            when_to_apply="When data tables with content rows are visible.",
        ),
    ),
    SceneType.SETTINGS: (
        Skill(
            name="settings_toggle_labels",
            principle=(
                "Toggle switches and checkboxes have labels that must fit on one line. "
                "German settings labels are frequently truncated. Always suggest a compact alternative."
            ),
            when_to_apply="When settings/preferences screens with toggles are visible.",
        ),
        Skill(
            name="settings_section_headers",
            principle=(
                "Settings section headers (e.g., 'Account Settings' → 'Kontoeinstellungen') "
                "may overflow their container. Check each section header independently."
            ),
            when_to_apply="When settings pages with grouped sections are visible.",
        ),
    ),
    SceneType.ERROR_PAGE: (
        Skill(
            name="error_tone_check",
            principle=(
                "Error pages should maintain a helpful, non-blame tone in the target language. "
                "Verify that error messages don't sound harsh or overly technical after translation."
            ),
            when_to_apply="When 404, 500, or other error pages are visible.",
        ),
    ),
    SceneType.GENERIC: (),
})
