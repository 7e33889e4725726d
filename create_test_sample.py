#!/usr/bin/env python3
"""
Create a minimal sample KJV corpus for trying the CLI and server.

Writes data/scripture-kjv.json (reference-keyed store layout) and
data/sample-kjv.csv with the same verses.
"""
import csv
import json
from pathlib import Path

from kjvguard.paths import DATA_DIR, DEFAULT_CORPUS_PATH

SAMPLE = {
    "Genesis 1:1": "In the beginning God created the heaven and the earth.",
    "Genesis 1:2": "And the earth was without form, and void; and darkness was upon the face of the deep. And the Spirit of God moved upon the face of the waters.",
    "Genesis 1:3": "And God said, Let there be light: and there was light.",
    "Psalms 23:1": "The LORD is my shepherd; I shall not want.",
    "Psalms 23:2": "He maketh me to lie down in green pastures: he leadeth me beside the still waters.",
    "Psalms 23:3": "He restoreth my soul: he leadeth me in the paths of righteousness for his name's sake.",
    "Song of Solomon 2:1": "I am the rose of Sharon, and the lily of the valleys.",
    "John 3:16": "For God so loved the world, that he gave his only begotten Son, that whosoever believeth in him should not perish, but have everlasting life.",
    "John 3:17": "For God sent not his Son into the world to condemn the world; but that the world through him might be saved.",
    "Galatians 1:8": "But though we, or an angel from heaven, preach any other gospel unto you than that which we have preached unto you, let him be accursed.",
    "1 John 4:2": "Hereby know ye the Spirit of God: Every spirit that confesseth that Jesus Christ is come in the flesh is of God:",
    "1 John 4:3": "And every spirit that confesseth not that Jesus Christ is come in the flesh is not of God: and this is that spirit of antichrist, whereof ye have heard that it should come; and even now already is it in the world.",
}


def main() -> None:
    DATA_DIR.mkdir(exist_ok=True)

    DEFAULT_CORPUS_PATH.write_text(
        json.dumps({"verses": SAMPLE}, indent=2, ensure_ascii=False), encoding="utf-8"
    )
    print(f"[ok] Created sample corpus: {DEFAULT_CORPUS_PATH}")

    csv_path = DATA_DIR / "sample-kjv.csv"
    with csv_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["book", "chapter", "verse", "text"])
        for ref, text in SAMPLE.items():
            book, cv = ref.rsplit(" ", 1)
            chapter, verse = cv.split(":")
            writer.writerow([book, chapter, verse, text])
    print(f"[ok] Created sample CSV: {csv_path}")
    print(f"     Contains {len(SAMPLE)} verses (Genesis 1, Psalms 23, John 3, 1 John 4, ...)")


if __name__ == "__main__":
    main()
