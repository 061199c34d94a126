import random
import unittest

from game import (
    START_CODE,
    COLLATE_CODE,
    FormatError,
    Noun,
    ParticleCollate,
    ParticleStart,
    Symbol,
    Verb,
    classify,
    code_cells,
    is_point_symmetric,
    parse_pattern,
)


def _pat(slashed):
    # '#####/#   #/...' -> five rows
    return "\n".join(slashed.split("/"))


class TestSymbolClassifier(unittest.TestCase):
    def test_given_known_bitmaps_when_classifying_then_parts_of_speech_match(self):
        cases = [
            ("#####/#   #/# # #/#   #/#####", ParticleCollate()),
            ("#####/  # #/#   #/# #  /#####", Noun(islands=2, depth=0)),
            (" ####/##  #/# # #/#  ##/#### ", Noun(islands=2, depth=1)),
            ("# ###/#    /# ###/#   #/#####", Verb(islands=2, depth=0)),
            ("#####/#   #/# # #/    #/#####", Verb(islands=2, depth=1)),
            ("## ##/#   #/#####/#   #/## ##", Noun(islands=1, depth=0)),
        ]
        for idx, (pattern, expect) in enumerate(cases):
            got = Symbol.from_pattern(_pat(pattern)).category
            self.assertEqual(got, expect, f"case {idx}:\n{_pat(pattern)}")

    def test_given_sentinel_codes_when_classifying_then_particles_win_over_symmetry(self):
        # Both sentinels are point-symmetric, so analysis alone would call them nouns.
        self.assertTrue(is_point_symmetric(code_cells(START_CODE)))
        self.assertEqual(classify(START_CODE), ParticleStart())
        self.assertEqual(classify(COLLATE_CODE), ParticleCollate())
        self.assertEqual(parse_pattern("#####\n#...#\n#___#\n#   #\n#####"), START_CODE)

    def test_given_empty_bitmap_when_classifying_then_noun_without_islands(self):
        self.assertEqual(classify(0), Noun(islands=0, depth=0))

    def test_given_single_pixels_when_classifying_then_symmetry_decides_kind(self):
        self.assertEqual(classify(1), Verb(islands=1, depth=1))           # top-left corner
        self.assertEqual(classify(1 << 12), Noun(islands=1, depth=1))     # centre
        self.assertEqual(classify((1 << 25) - 1), Noun(islands=1, depth=0))
        # opposite corners: symmetric, two singleton islands
        self.assertEqual(classify(1 | (1 << 24)), Noun(islands=2, depth=2))

    def test_given_diagonal_pixels_when_classifying_then_they_are_separate_islands(self):
        code = parse_pattern("#\n.#")
        self.assertEqual(classify(code), Verb(islands=2, depth=2))

    def test_given_random_codes_when_classifying_then_depth_never_exceeds_islands(self):
        rng = random.Random(1234)
        for _ in range(500):
            code = rng.getrandbits(25)
            cat = classify(code)
            if isinstance(cat, (Noun, Verb)):
                self.assertGreaterEqual(cat.depth, 0)
                self.assertLessEqual(cat.depth, cat.islands)
                self.assertEqual(classify(code), cat)

    def test_given_pattern_text_when_parsing_then_bits_are_row_major(self):
        self.assertEqual(parse_pattern("#"), 1)
        self.assertEqual(parse_pattern("....#"), 1 << 4)
        self.assertEqual(parse_pattern("\n#"), 1 << 5)
        self.assertEqual(parse_pattern(["", "", "", "", "    #"]), 1 << 24)
        self.assertEqual(parse_pattern("x.\t_o"), 1 | (1 << 4))

    def test_given_oversized_pattern_when_parsing_then_format_error(self):
        with self.assertRaises(FormatError):
            parse_pattern("#\n#\n#\n#\n#\n#")
        with self.assertRaises(FormatError):
            parse_pattern("######")
        with self.assertRaises(FormatError):
            Symbol(1 << 25)

    def test_given_non_text_pattern_when_parsing_then_format_error(self):
        for bad in (5, None, ["#", 3], [["#"]], {"row": "#"}):
            with self.subTest(pattern=bad):
                with self.assertRaises(FormatError):
                    parse_pattern(bad)

    def test_given_symbols_when_comparing_then_identity_is_the_code(self):
        a = Symbol.from_pattern("#")
        b = Symbol(1)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len({a, b}), 1)
        self.assertEqual(a.rows(), ["#    ", "     ", "     ", "     ", "     "])
        self.assertFalse(a.is_start())
        self.assertTrue(Symbol(START_CODE).is_start())


if __name__ == '__main__':
    unittest.main(verbosity=2)
