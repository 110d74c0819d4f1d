KEY_ALPHABET = "23456789ABCDEFGHIJKLMNPQRSTUVWXYZ"
KEY_LENGTH = 8

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

FALLBACK_FIELDS = ("title", "abstractNote", "url", "accessDate", "date", "extra")

HIDDEN_ITEM_TYPES = ("attachment", "note")

ITEM_ACTIONS = ("get", "update", "delete")

DEFAULT_CREATOR_TYPE = "author"

# Fields that exist only as the target of a base mapping still need a vocabulary entry.
BASE_FIELDS = ("title", "publicationTitle", "publisher", "date", "type", "number", "pages")

_ARCHIVE_FIELDS = ["archive", "archiveLocation", "libraryCatalog", "callNumber", "rights", "extra"]
_ACCESS_FIELDS = ["url", "accessDate"]

# Ordered per-type field registry. A (field, base) pair registers a type-specific
# field that stands in for a base field on that type.
ITEM_TYPE_FIELDS: dict[str, list[str | tuple[str, str]]] = {
    "attachment": ["title", "accessDate", "url"],
    "note": [],
    "book": [
        "title", "abstractNote", "series", "seriesNumber", "volume", "numberOfVolumes", "edition",
        "place", "publisher", "date", "numPages", "language", "ISBN", "shortTitle",
        *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "bookSection": [
        "title", "abstractNote", ("bookTitle", "publicationTitle"), "series", "seriesNumber", "volume",
        "numberOfVolumes", "edition", "place", "publisher", "date", "pages", "language", "ISBN",
        "shortTitle", *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "journalArticle": [
        "title", "abstractNote", "publicationTitle", "volume", "issue", "pages", "date", "series",
        "seriesTitle", "seriesText", "journalAbbreviation", "language", "DOI", "ISSN", "shortTitle",
        *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "magazineArticle": [
        "title", "abstractNote", "publicationTitle", "volume", "issue", "date", "pages", "language",
        "ISSN", "shortTitle", *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "newspaperArticle": [
        "title", "abstractNote", "publicationTitle", "place", "edition", "date", "section", "pages",
        "language", "shortTitle", "ISSN", *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "thesis": [
        "title", "abstractNote", ("thesisType", "type"), ("university", "publisher"), "place", "date",
        "numPages", "language", "shortTitle", *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "report": [
        "title", "abstractNote", ("reportNumber", "number"), ("reportType", "type"), "seriesTitle",
        "place", ("institution", "publisher"), "date", "pages", "language", "shortTitle",
        *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "conferencePaper": [
        "title", "abstractNote", "date", ("proceedingsTitle", "publicationTitle"), "conferenceName",
        "place", "publisher", "volume", "pages", "series", "language", "DOI", "ISBN", "shortTitle",
        *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "preprint": [
        "title", "abstractNote", ("genre", "type"), ("repository", "publisher"), ("archiveID", "number"),
        "place", "date", "series", "seriesNumber", "DOI", "citationKey", "shortTitle", "language",
        *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "webpage": [
        "title", "abstractNote", ("websiteTitle", "publicationTitle"), ("websiteType", "type"), "date",
        "shortTitle", "language", *_ACCESS_FIELDS, "rights", "extra",
    ],
    "blogPost": [
        "title", "abstractNote", ("blogTitle", "publicationTitle"), ("websiteType", "type"), "date",
        "shortTitle", "language", *_ACCESS_FIELDS, "rights", "extra",
    ],
    "document": [
        "title", "abstractNote", "publisher", "date", "language", "shortTitle",
        *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "manuscript": [
        "title", "abstractNote", ("manuscriptType", "type"), "place", "date", "numPages",
        "language", "shortTitle", *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "letter": [
        "title", "abstractNote", ("letterType", "type"), "date", "language", "shortTitle",
        *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "presentation": [
        "title", "abstractNote", ("presentationType", "type"), "date", "place", "meetingName",
        "language", "shortTitle", *_ACCESS_FIELDS, "rights", "extra",
    ],
    "email": [
        ("subject", "title"), "abstractNote", "date", "shortTitle", "language",
        *_ACCESS_FIELDS, "rights", "extra",
    ],
    "case": [
        ("caseName", "title"), "abstractNote", ("court", "publisher"), ("dateDecided", "date"),
        ("docketNumber", "number"), "reporter", "reporterVolume", ("firstPage", "pages"), "history",
        "language", "shortTitle", *_ACCESS_FIELDS, *_ARCHIVE_FIELDS,
    ],
    "statute": [
        ("nameOfAct", "title"), "abstractNote", "code", "codeNumber", ("publicLawNumber", "number"),
        ("dateEnacted", "date"), "pages", "section", "session", "history", "language",
        "shortTitle", *_ACCESS_FIELDS, "rights", "extra",
    ],
}
