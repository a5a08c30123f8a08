# faraid/rules/reasons.py

from fractions import Fraction
from typing import Dict, Mapping

from faraid.math.ashl import format_fraction
from faraid.rules.heirs import HeirType, label

# =========================
# Bilingual templates, keyed by reason / note code
# =========================
TEMPLATES: Dict[str, Dict[str, str]] = {
    # --- furudh ---
    "husband_with_descendants": {
        "en": "{heir} receives {fraction} because the deceased left descendants.",
        "ar": "يرث {heir} {fraction} لوجود الفرع الوارث.",
    },
    "husband_without_descendants": {
        "en": "{heir} receives {fraction} because the deceased left no descendants.",
        "ar": "يرث {heir} {fraction} لعدم وجود الفرع الوارث.",
    },
    "wife_with_descendants": {
        "en": "{heir} ({count}) share {fraction} because the deceased left descendants.",
        "ar": "ترث {heir} ({count}) {fraction} لوجود الفرع الوارث.",
    },
    "wife_without_descendants": {
        "en": "{heir} ({count}) share {fraction} because the deceased left no descendants.",
        "ar": "ترث {heir} ({count}) {fraction} لعدم وجود الفرع الوارث.",
    },
    "mother_sixth": {
        "en": "{heir} receives {fraction} because of descendants or two or more siblings.",
        "ar": "ترث {heir} {fraction} لوجود الفرع الوارث أو جمع من الإخوة.",
    },
    "mother_third": {
        "en": "{heir} receives {fraction} with no descendants and fewer than two siblings.",
        "ar": "ترث {heir} {fraction} لعدم الفرع الوارث وعدم الجمع من الإخوة.",
    },
    "mother_umariyyah": {
        "en": "{heir} receives one third of what remains after the spouse ({fraction}), the Umariyyah case.",
        "ar": "ترث {heir} ثلث الباقي بعد فرض الزوجية ({fraction}) في المسألة العمرية.",
    },
    "father_with_son": {
        "en": "{heir} receives {fraction} because the deceased left a son.",
        "ar": "يرث {heir} {fraction} لوجود الابن.",
    },
    "father_with_daughter": {
        "en": "{heir} receives {fraction} and the residue, because the deceased left daughters but no son.",
        "ar": "يرث {heir} {fraction} فرضًا والباقي تعصيبًا لوجود البنت دون الابن.",
    },
    "grandfather_with_son": {
        "en": "{heir} receives {fraction} in place of the father because the deceased left a son.",
        "ar": "يرث {heir} {fraction} مقام الأب لوجود الابن.",
    },
    "grandfather_with_daughter": {
        "en": "{heir} receives {fraction} and the residue in place of the father, with daughters and no son.",
        "ar": "يرث {heir} {fraction} فرضًا والباقي تعصيبًا مقام الأب لوجود البنت.",
    },
    "grandmothers_sixth": {
        "en": "{heir} receives from 1/6, divided equally among the grandmothers ({fraction_share}).",
        "ar": "ترث {heir} من السدس يقسم بين الجدات بالتساوي ({fraction_share}).",
    },
    "daughter_half": {
        "en": "{heir} receives {fraction} as the only daughter with no son.",
        "ar": "ترث {heir} {fraction} لانفرادها وعدم وجود الابن.",
    },
    "daughters_two_thirds": {
        "en": "{heir} ({count}) share {fraction} equally, with no son.",
        "ar": "يرث {heir} ({count}) {fraction} بالتساوي لعدم وجود الابن.",
    },
    "sister_half": {
        "en": "{heir} receives {fraction} as a single sister with no brother, descendant or father.",
        "ar": "ترث {heir} {fraction} لانفرادها وعدم المعصب والفرع الوارث والأب.",
    },
    "sisters_two_thirds": {
        "en": "{heir} ({count}) share {fraction} equally, with no brother, descendant or father.",
        "ar": "يرث {heir} ({count}) {fraction} بالتساوي لعدم المعصب والفرع الوارث والأب.",
    },
    "paternal_sister_takmila": {
        "en": "{heir} receives {fraction} to complete two thirds with the full sister.",
        "ar": "ترث {heir} {fraction} تكملة للثلثين مع الأخت الشقيقة.",
    },
    "maternal_sibling_sixth": {
        "en": "{heir} receives {fraction} as the single maternal sibling.",
        "ar": "يرث {heir} {fraction} لانفراده من الإخوة لأم.",
    },
    "maternal_siblings_third": {
        "en": "{heir} share in {fraction} with the other maternal siblings, equally regardless of sex ({fraction_share}).",
        "ar": "يشترك {heir} في {fraction} مع الإخوة لأم بالتساوي بين الذكر والأنثى ({fraction_share}).",
    },
    # --- asaba ---
    "residuary_agnate": {
        "en": "{heir} takes the residue as a residuary heir.",
        "ar": "يرث {heir} الباقي تعصيبًا بالنفس.",
    },
    "residuary_with_brother": {
        "en": "{heir} shares the residue with the brother(s), the male taking twice the female.",
        "ar": "ترث {heir} الباقي تعصيبًا بالغير للذكر مثل حظ الأنثيين.",
    },
    "residuary_with_daughters": {
        "en": "{heir} becomes residuary together with the daughter(s).",
        "ar": "ترث {heir} الباقي تعصيبًا مع الغير (مع البنات).",
    },
    "residue_exhausted": {
        "en": "{heir} is residuary but nothing remains after the fixed shares.",
        "ar": "{heir} عاصب ولم يبق له شيء بعد أصحاب الفروض.",
    },
    "residue_taken_by_nearer": {
        "en": "{heir} is residuary but a nearer residuary heir takes the residue.",
        "ar": "{heir} عاصب ويحجبه عاصب أقرب منه.",
    },
    # --- jadd wal ikhwah ---
    "grandfather_sixth_with_siblings": {
        "en": "{heir} takes 1/6 of the whole, the best option against the siblings.",
        "ar": "يأخذ {heir} سدس التركة لأنه الأحظ له مع الإخوة.",
    },
    "grandfather_muqasamah": {
        "en": "{heir} divides the residue with the siblings as a brother (muqasamah).",
        "ar": "يقاسم {heir} الإخوة في الباقي كأخ (المقاسمة).",
    },
    "grandfather_third_of_remainder": {
        "en": "{heir} takes one third of the residue, the best option against the siblings.",
        "ar": "يأخذ {heir} ثلث الباقي لأنه الأحظ له مع الإخوة.",
    },
    "grandfather_third": {
        "en": "{heir} takes one third of the whole, the best option against the siblings.",
        "ar": "يأخذ {heir} ثلث جميع المال لأنه الأحظ له مع الإخوة.",
    },
    "siblings_with_grandfather": {
        "en": "{heir} takes what the grandfather leaves, the male taking twice the female.",
        "ar": "يرث {heir} ما بقي بعد الجد للذكر مثل حظ الأنثيين.",
    },
    "muadda_counted_only": {
        "en": "{heir} is counted against the grandfather (al-mu'adda) but the full siblings take the portion.",
        "ar": "يعد {heir} على الجد (المعادة) ثم يأخذ الأشقاء نصيبه.",
    },
    "muadda_paternal_remainder": {
        "en": "{heir} takes what exceeds the full sister's share after al-mu'adda.",
        "ar": "يأخذ {heir} ما فضل عن فرض الشقيقة بعد المعادة.",
    },
    "akdariyyah_grandfather": {
        "en": "{heir} receives {fraction} in the Akdariyyah before 'awl.",
        "ar": "يفرض لـ{heir} {fraction} في الأكدرية قبل العول.",
    },
    "akdariyyah_sister": {
        "en": "{heir} receives {fraction} in the Akdariyyah before 'awl.",
        "ar": "يفرض لـ{heir} {fraction} في الأكدرية قبل العول.",
    },
    "akdariyyah_muqasamah": {
        "en": "{heir}: the grandfather's and sister's shares are pooled and divided 2:1 (Akdariyyah).",
        "ar": "{heir}: يجمع نصيب الجد والأخت ويقسم بينهما للذكر مثل حظ الأنثيين (الأكدرية).",
    },
    # --- adjustment suffixes ---
    "suffix_awl": {
        "en": "Reduced by 'awl to {fraction}.",
        "ar": "نقص بالعول إلى {fraction}.",
    },
    "suffix_radd": {
        "en": "Increased by radd to {fraction}.",
        "ar": "زاد بالرد إلى {fraction}.",
    },
    # --- hajb ---
    "excluded": {
        "en": "{heir} is excluded (hajb) by {by}.",
        "ar": "{heir} محجوب حجب حرمان بـ{by}.",
    },
    # --- notes ---
    "note_validated": {
        "en": "Estate {estate}; heirs: {heirs}.",
        "ar": "التركة {estate}؛ الورثة: {heirs}.",
    },
    "note_fixed_total": {
        "en": "Fixed shares total {total}; the base (ashl al-mas'ala) is {base}.",
        "ar": "مجموع الفروض {total}؛ أصل المسألة {base}.",
    },
    "note_comparison": {
        "en": "Denominators {a} and {b}: {relation}.",
        "ar": "المقامان {a} و{b}: {relation}.",
    },
    "note_adil": {
        "en": "The fixed shares exactly exhaust the estate ('adila).",
        "ar": "استغرقت الفروض التركة (مسألة عادلة).",
    },
    "note_residuary": {
        "en": "The residue {remainder} goes to the residuary heirs.",
        "ar": "الباقي {remainder} للعصبة.",
    },
    "note_awl": {
        "en": "'Awl: the fixed shares total {total}, so each is divided by {total}; the base rises from {before} to {after}.",
        "ar": "العول: مجموع الفروض {total} فتقسم كل الفروض عليه؛ يعول الأصل من {before} إلى {after}.",
    },
    "note_radd": {
        "en": "Radd: {remainder} is left with no residuary heir and returns to {heirs} in proportion to their shares.",
        "ar": "الرد: بقي {remainder} ولا عاصب فيرد على {heirs} بنسبة فروضهم.",
    },
    "note_unallocated": {
        "en": "No heir can take the return; {remainder} of the estate remains undistributed.",
        "ar": "لا يوجد من يرد عليه؛ يبقى {remainder} من التركة غير موزع.",
    },
    "umariyyah": {
        "en": "Umariyyah: the mother takes one third of what remains after the spouse ({mother}).",
        "ar": "العمرية: للأم ثلث الباقي بعد فرض الزوجية ({mother}).",
    },
    "jadd_options": {
        "en": "Grandfather with siblings: options {options}; the grandfather takes {chosen}.",
        "ar": "الجد مع الإخوة: الخيارات {options}؛ يأخذ الجد {chosen}.",
    },
    "jadd_minimum_sixth": {
        "en": "Grandfather with siblings: only {residue} remains, so the grandfather takes 1/6 and the siblings receive nothing.",
        "ar": "الجد مع الإخوة: لم يبق إلا {residue} فيفرض للجد السدس ويسقط الإخوة.",
    },
    "akdariyyah_detected": {
        "en": "Akdariyyah: husband, mother, grandfather and one sister.",
        "ar": "المسألة الأكدرية: زوج وأم وجد وأخت.",
    },
    "akdariyyah_merge": {
        "en": "Akdariyyah: the grandfather's and sister's combined {pooled} is divided 2:1.",
        "ar": "الأكدرية: يقسم مجموع نصيبي الجد والأخت {pooled} للذكر مثل حظ الأنثيين.",
    },
    "inkisar_group": {
        "en": "Inkisar for {heir}: {heads} heads against {saham} shares ({relation}).",
        "ar": "انكسار على {heir}: {heads} رؤوس و{saham} سهام ({relation}).",
    },
    "tashih": {
        "en": "Tashih: base {before} x {multiplier} = {after}.",
        "ar": "التصحيح: {before} × {multiplier} = {after}.",
    },
}

OPTION_LABELS: Dict[str, Dict[str, str]] = {
    "muqasamah": {"en": "muqasamah", "ar": "المقاسمة"},
    "third_of_remainder": {"en": "1/3 of the residue", "ar": "ثلث الباقي"},
    "sixth": {"en": "1/6 of the whole", "ar": "سدس المال"},
    "third": {"en": "1/3 of the whole", "ar": "ثلث المال"},
}

_SEPARATOR = {"en": ", ", "ar": "، "}


class _Missing(dict):
    def __missing__(self, key):
        return "{" + key + "}"


def _format_value(value, language: str):
    if isinstance(value, HeirType):
        return label(value, language)
    if isinstance(value, Fraction):
        return format_fraction(value)
    if isinstance(value, (list, tuple)):
        return _SEPARATOR.get(language, ", ").join(str(_format_value(v, language)) for v in value)
    if isinstance(value, Mapping):
        return _SEPARATOR.get(language, ", ").join(
            f"{OPTION_LABELS.get(k, {}).get(language, k)} {_format_value(v, language)}"
            for k, v in value.items()
        )
    if isinstance(value, str) and value in OPTION_LABELS:
        return OPTION_LABELS[value].get(language, value)
    return value


def render(key: str, language: str = "en", **params) -> str:
    templates = TEMPLATES.get(key)
    if templates is None:
        return key
    template = templates.get(language, templates["en"])
    values = _Missing({k: _format_value(v, language) for k, v in params.items()})
    return template.format_map(values)
