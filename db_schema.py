"""
Canonical SQLite schema for the precedent case store.

Shared between build_cases_db.py (seeding) and guidance_stack.retrieval (search).
Edit here; both consumers pick it up.
"""

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS cases (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        year INTEGER,
        court TEXT,
        category TEXT,
        url TEXT,
        key_holding TEXT,
        legal_sections TEXT,
        practical_takeaway TEXT,
        keywords TEXT
    );

    CREATE INDEX IF NOT EXISTS idx_cases_category ON cases(category);
    CREATE INDEX IF NOT EXISTS idx_cases_year ON cases(year);

    CREATE VIRTUAL TABLE IF NOT EXISTS cases_fts USING fts5(
        title,
        key_holding,
        practical_takeaway,
        keywords,
        category,
        content=cases,
        content_rowid=rowid
    );

    -- Triggers to keep FTS in sync
    CREATE TRIGGER IF NOT EXISTS cases_ai AFTER INSERT ON cases BEGIN
        INSERT INTO cases_fts(rowid, title, key_holding, practical_takeaway,
            keywords, category)
        VALUES (new.rowid, new.title, new.key_holding, new.practical_takeaway,
            new.keywords, new.category);
    END;

    CREATE TRIGGER IF NOT EXISTS cases_ad AFTER DELETE ON cases BEGIN
        INSERT INTO cases_fts(cases_fts, rowid, title, key_holding,
            practical_takeaway, keywords, category)
        VALUES ('delete', old.rowid, old.title, old.key_holding,
            old.practical_takeaway, old.keywords, old.category);
    END;

    CREATE TRIGGER IF NOT EXISTS cases_au AFTER UPDATE ON cases BEGIN
        INSERT INTO cases_fts(cases_fts, rowid, title, key_holding,
            practical_takeaway, keywords, category)
        VALUES ('delete', old.rowid, old.title, old.key_holding,
            old.practical_takeaway, old.keywords, old.category);
        INSERT INTO cases_fts(rowid, title, key_holding, practical_takeaway,
            keywords, category)
        VALUES (new.rowid, new.title, new.key_holding, new.practical_takeaway,
            new.keywords, new.category);
    END;
"""

# Column order for INSERT statements (must match SCHEMA_SQL table definition)
INSERT_COLUMNS = (
    "id", "title", "year", "court", "category", "url",
    "key_holding", "legal_sections", "practical_takeaway", "keywords",
)

INSERT_OR_REPLACE_SQL = f"""INSERT OR REPLACE INTO cases
    ({', '.join(INSERT_COLUMNS)})
    VALUES ({', '.join('?' for _ in INSERT_COLUMNS)})"""
