"""
The fixed corpus of books offered by the reader.
Names follow the Almeida translation used by the content provider.
"""

from typing import List, Optional


# Book order and metadata: (name, abbreviation, chapters)
BIBLE_BOOKS = [
    # Antigo Testamento
    ('Gênesis', 'gn', 50), ('Êxodo', 'ex', 40), ('Levítico', 'lv', 27),
    ('Números', 'nm', 36), ('Deuteronômio', 'dt', 34), ('Josué', 'js', 24),
    ('Juízes', 'jz', 21), ('Rute', 'rt', 4), ('1 Samuel', '1sm', 31),
    ('2 Samuel', '2sm', 24), ('1 Reis', '1rs', 22), ('2 Reis', '2rs', 25),
    ('1 Crônicas', '1cr', 29), ('2 Crônicas', '2cr', 36), ('Esdras', 'ed', 10),
    ('Neemias', 'ne', 13), ('Ester', 'et', 10), ('Jó', 'jó', 42),
    ('Salmos', 'sl', 150), ('Provérbios', 'pv', 31), ('Eclesiastes', 'ec', 12),
    ('Cânticos', 'ct', 8), ('Isaías', 'is', 66), ('Jeremias', 'jr', 52),
    ('Lamentações', 'lm', 5), ('Ezequiel', 'ez', 48), ('Daniel', 'dn', 12),
    ('Oséias', 'os', 14), ('Joel', 'jl', 3), ('Amós', 'am', 9),
    ('Obadias', 'ob', 1), ('Jonas', 'jn', 4), ('Miquéias', 'mq', 7),
    ('Naum', 'na', 3), ('Habacuque', 'hc', 3), ('Sofonias', 'sf', 3),
    ('Ageu', 'ag', 2), ('Zacarias', 'zc', 14), ('Malaquias', 'ml', 4),
    # Novo Testamento
    ('Mateus', 'mt', 28), ('Marcos', 'mc', 16), ('Lucas', 'lc', 24),
    ('João', 'jo', 21), ('Atos', 'at', 28), ('Romanos', 'rm', 16),
    ('1 Coríntios', '1co', 16), ('2 Coríntios', '2co', 13),
    ('Gálatas', 'gl', 6), ('Efésios', 'ef', 6), ('Filipenses', 'fp', 4),
    ('Colossenses', 'cl', 4), ('1 Tessalonicenses', '1ts', 5), ('2 Tessalonicenses', '2ts', 3),
    ('1 Timóteo', '1tm', 6), ('2 Timóteo', '2tm', 4), ('Tito', 'tt', 3),
    ('Filemom', 'fm', 1), ('Hebreus', 'hb', 13), ('Tiago', 'tg', 5),
    ('1 Pedro', '1pe', 5), ('2 Pedro', '2pe', 3), ('1 João', '1jo', 5),
    ('2 João', '2jo', 1), ('3 João', '3jo', 1), ('Judas', 'jd', 1),
    ('Apocalipse', 'ap', 22),
]

BOOKS = [name for name, _, _ in BIBLE_BOOKS]
BOOKS_WITH_CHAPTERS = {name: chapters for name, _, chapters in BIBLE_BOOKS}
_BY_ABBREVIATION = {abbrev: name for name, abbrev, _ in BIBLE_BOOKS}


def chapters_in_book(book: str) -> int:
    """Number of chapters in a book, 0 for unknown books."""
    return BOOKS_WITH_CHAPTERS.get(book, 0)


def chapter_range(book: str) -> List[int]:
    """Chapters a picker may offer for a book."""
    return list(range(1, chapters_in_book(book) + 1))


def find_book(query: str) -> Optional[str]:
    """Resolve a book by exact name, abbreviation or case-insensitive name."""
    if query in BOOKS_WITH_CHAPTERS:
        return query
    lowered = query.strip().casefold()
    if lowered in _BY_ABBREVIATION:
        return _BY_ABBREVIATION[lowered]
    for name in BOOKS:
        if name.casefold() == lowered:
            return name
    return None


def get_books() -> List[dict]:
    """Get list of all books with metadata."""
    books = []
    for index, (name, abbrev, chapters) in enumerate(BIBLE_BOOKS):
        books.append({
            'name': name,
            'abbreviation': abbrev,
            'chapters': chapters,
            'testament': 'AT' if index < 39 else 'NT',
        })
    return books
