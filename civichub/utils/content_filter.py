"""
Content filter - maskira zabranjene reci u korisnickom tekstu.

Lista reci se ne hardkoduje ovde vec se prosledjuje iz konfiguracije
(PROFANITY_WORDS), tako da svaka instalacija moze imati svoju listu.
"""

import re


class ProfanityFilter:
    """
    Detekcija i maskiranje zabranjenih reci.

    Poklapaju se samo cele reci (word boundary), bez obzira na velika
    i mala slova. Maskirana rec ima istu duzinu kao original.
    """

    def __init__(self, words, mask_char='*'):
        if len(mask_char) != 1:
            raise ValueError('mask_char mora biti tacno jedan karakter')
        self.mask_char = mask_char
        # Redosled cuvamo, duplikate izbacujemo
        self.words = tuple(dict.fromkeys(w.strip().lower() for w in words if w and w.strip()))
        self._pattern = None
        if self.words:
            # Duze reci prve da 'fucking' ne bi bio delimicno pokriven sa 'fuck'
            alternatives = sorted(self.words, key=len, reverse=True)
            # Granica je "nije slovo/cifra", pa rade i reci poput 'a$$'
            self._pattern = re.compile(
                r'(?<!\w)(?:' + '|'.join(re.escape(w) for w in alternatives) + r')(?!\w)',
                re.IGNORECASE
            )

    def filter(self, text):
        """
        Zamenjuje svaku zabranjenu rec nizom mask karaktera iste duzine.

        Returns:
            Filtrirani tekst. Prazan ili None ulaz se vraca nepromenjen.
        """
        if not text or self._pattern is None:
            return text
        return self._pattern.sub(lambda m: self.mask_char * len(m.group(0)), text)

    def detect(self, text):
        """Da li tekst sadrzi bar jednu zabranjenu rec."""
        if not text or self._pattern is None:
            return False
        return self._pattern.search(text) is not None
