# ABOUTME: Canned Google Books volumes API response fixtures for testing.
# ABOUTME: Provides realistic JSON dicts for ISBN lookups, title searches, and invalid bodies.

LOTR_ISBN = "9780544003415"

LOTR_VOLUME = {
    "kind": "books#volume",
    "id": "yl4dILkcqm4C",
    "volumeInfo": {
        "title": "The Lord of the Rings",
        "subtitle": "One Volume",
        "authors": ["J.R.R. Tolkien"],
        "publisher": "Houghton Mifflin Harcourt",
        "publishedDate": "2012-02-15",
        "description": "The complete trilogy in one volume.",
        "industryIdentifiers": [
            {"type": "ISBN_10", "identifier": "0544003411"},
            {"type": "ISBN_13", "identifier": "9780544003415"},
        ],
        "pageCount": 1216,
        "categories": ["Fiction"],
        "imageLinks": {
            "smallThumbnail": "http://books.google.com/books/content?id=yl4dILkcqm4C&zoom=5",
            "thumbnail": "http://books.google.com/books/content?id=yl4dILkcqm4C&zoom=1",
        },
        "language": "en",
    },
}

ISBN_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 1,
    "items": [LOTR_VOLUME],
}

ISBN_RESPONSE_NO_IDENTIFIERS = {
    "kind": "books#volumes",
    "totalItems": 1,
    "items": [
        {
            "id": "noIsbn01",
            "volumeInfo": {"title": "A Book Without Identifiers", "publishedDate": "unknown"},
        }
    ],
}

EMPTY_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 0,
}

TITLE_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 57,
    "items": [
        {
            "id": "B1hSG45JCX4C",
            "volumeInfo": {
                "title": "Dune",
                "authors": ["Frank Herbert"],
                "publishedDate": "1990-09-01",
                "industryIdentifiers": [
                    {"type": "ISBN_13", "identifier": "9780441013593"},
                ],
                "imageLinks": {
                    "thumbnail": "http://books.google.com/books/content?id=B1hSG45JCX4C&zoom=1",
                    "large": "http://books.google.com/books/content?id=B1hSG45JCX4C&zoom=3",
                },
                "language": "en",
            },
        },
        {
            "id": "Xx2QAAAACAAJ",
            "volumeInfo": {
                "title": "Dune Messiah",
                "authors": ["Frank Herbert"],
                "publishedDate": "1969",
            },
        },
        {
            "id": "blank0001",
            "volumeInfo": {"title": ""},
        },
    ],
}

INVALID_RESPONSE = {
    "kind": "books#volumes",
    "totalItems": 1,
    "items": [{"id": "notitle", "volumeInfo": {"authors": ["Anonymous"]}}],
}

MISSING_TOTAL_RESPONSE = {
    "kind": "books#volumes",
    "items": [],
}
