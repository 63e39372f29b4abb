import unittest

from alphabet import ALPHA26, Alphabet
from debug import Debug
from errors import ConfigurationError, UsageError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor
from wheels import LEGACY_ROTORS, legacy_catalog, legacy_machine


def small_machine(num_rotors=2, pawls=0):
    """Alphabet ABCD with one reflector, one fixed and one moving rotor."""
    alpha = Alphabet("ABCD")
    catalog = [
        Rotor.reflector("R", Permutation("(A B)(C D)", alpha)),
        Rotor.fixed("F", Permutation("(B A C D)", alpha)),
        Rotor.moving("M", Permutation("(AC)", alpha), ""),
    ]
    return Machine(alpha, num_rotors, pawls, catalog)


class MachineTest(unittest.TestCase):
    def setUp(self):
        self.machine = legacy_machine()

    def key(self, names, setting, plugs=""):
        self.machine.insert_rotors(names)
        self.machine.set_rotors(setting)
        self.machine.set_plugboard(Permutation(plugs, self.machine.alphabet))

    def test_known_vector(self):
        self.key(["B", "I", "II", "III"], "AAA")
        self.assertEqual(self.machine.convert_message("AAAAA"), "BDZGO")

    def test_reciprocal(self):
        plain = "FROMHISSHOULDERHIAWATHATOOKTHECAMERAOFROSEWOOD"
        for names, setting, plugs in [
            (["B", "I", "II", "III"], "AAA", ""),
            (["C", "VII", "V", "IV"], "QEV", "(AZ) (BY) (HO)"),
            (["A", "VI", "III", "I"], "ZMQ", "(PQ) (RS) (TU) (VW)"),
        ]:
            with self.subTest(names=names):
                self.key(names, setting, plugs)
                cipher = self.machine.convert_message(plain)
                self.assertEqual(len(cipher), len(plain))
                self.assertNotEqual(cipher, plain)
                self.key(names, setting, plugs)
                self.assertEqual(self.machine.convert_message(cipher), plain)

    def test_no_letter_encodes_to_itself(self):
        self.key(["B", "I", "II", "III"], "AAA", "(AB)")
        msg = ALPHA26 * 4
        for p, c in zip(msg, self.machine.convert_message(msg)):
            self.assertNotEqual(p, c)

    def test_double_step(self):
        self.key(["B", "I", "II", "III"], "ADU")
        seen = []
        for _ in range(3):
            self.machine.convert(0)
            seen.append(self.machine.windows())
        self.assertEqual(seen, ["ADV", "AEW", "BFX"])

    def test_middle_rotor_steps_twice_from_one_before_notch(self):
        self.key(["B", "I", "II", "III"], "ADV")
        self.machine.convert(0)
        self.assertEqual(self.machine.get_rotor(2).window(), "E")
        self.machine.convert(0)
        self.assertEqual(self.machine.get_rotor(2).window(), "F")

    def test_moving_rotor_beside_fixed_rotor_has_no_double_step(self):
        alpha = Alphabet(ALPHA26)
        catalog = legacy_catalog(alpha)
        catalog.append(Rotor.fixed("F", Permutation.from_wiring(LEGACY_ROTORS["IV"][0], alpha)))
        machine = Machine(alpha, 5, 3, catalog)
        machine.insert_rotors(["B", "F", "I", "II", "III"])
        machine.set_rotors("AADV")
        seen = []
        for _ in range(3):
            machine.convert(0)
            seen.append(machine.windows())
        self.assertEqual(seen, ["AAEW", "ABFX", "ABFY"])

    def test_fast_rotor_wraps(self):
        machine = small_machine(3, 1)
        machine.insert_rotors(["R", "F", "M"])
        machine.set_rotors("AA")
        for expected in [1, 2, 3, 0, 1]:
            machine.convert(0)
            self.assertEqual(machine.get_rotor(2).setting, expected)
            self.assertEqual(machine.get_rotor(1).setting, 0)

    def test_small_end_to_end(self):
        machine = small_machine()
        machine.insert_rotors(["R", "F"])
        machine.set_rotors("A")
        self.assertEqual(machine.convert_message("A"), "C")
        machine.set_rotors("A")
        self.assertEqual(machine.convert_message("C"), "A")
        machine.set_rotors("A")
        self.assertEqual(machine.convert_message("ABCD"), "CDAB")

    def test_plugboard_defaults_to_identity(self):
        machine = small_machine()
        self.assertEqual(machine.plugboard(), Permutation("", machine.alphabet))

    def test_plugboard_alphabet_checked(self):
        with self.assertRaises(UsageError):
            self.machine.set_plugboard(Permutation("", Alphabet("ABCD")))

    def test_set_rotors_length(self):
        self.machine.insert_rotors(["B", "I", "II", "III"])
        with self.assertRaises(UsageError):
            self.machine.set_rotors("AA")
        with self.assertRaises(UsageError):
            self.machine.set_rotors("AAAA")

    def test_set_rotors_skips_reflector(self):
        self.key(["B", "I", "II", "III"], "XYZ")
        self.assertEqual(self.machine.get_rotor(0).setting, 0)
        self.assertEqual(self.machine.windows(), "XYZ")

    def test_insert_rotors_errors(self):
        with self.assertRaises(UsageError):
            self.machine.insert_rotors(["B", "I", "II"])
        with self.assertRaises(UsageError):
            self.machine.insert_rotors(["B", "I", "II", "IX"])

    def test_convert_before_insert(self):
        with self.assertRaises(UsageError):
            self.machine.convert_message("A")

    def test_index_outside_alphabet(self):
        self.key(["B", "I", "II", "III"], "AAA")
        for bad in [-1, 26, 100]:
            with self.subTest(bad=bad), self.assertRaises(UsageError):
                self.machine.convert(bad)
        self.assertEqual(self.machine.windows(), "AAA")

    def test_symbol_outside_alphabet(self):
        self.key(["B", "I", "II", "III"], "AAA")
        with self.assertRaises(UsageError):
            self.machine.convert_message("AB1")
        self.assertEqual(self.machine.windows(), "AAA")

    def test_construction_limits(self):
        alpha = Alphabet("ABCD")
        with self.assertRaises(ConfigurationError):
            Machine(alpha, 1, 0, [])
        with self.assertRaises(ConfigurationError):
            Machine(alpha, 3, 3, [])
        with self.assertRaises(ConfigurationError):
            Machine(alpha, 3, -1, [])

    def test_catalog_problems(self):
        alpha = Alphabet("ABCD")
        r = Rotor.reflector("R", Permutation("(AB) (CD)", alpha))
        with self.assertRaises(ConfigurationError):
            Machine(alpha, 2, 0, [r, r])
        other = Rotor.fixed("F", Permutation("", Alphabet("ABCDE")))
        with self.assertRaises(ConfigurationError):
            Machine(alpha, 2, 0, [r, other])

    def test_catalog_is_copied(self):
        catalog = legacy_catalog()
        machine = Machine(Alphabet(ALPHA26), 4, 3, catalog)
        machine.insert_rotors(["B", "I", "II", "III"])
        machine.set_rotors("QQQ")
        self.assertTrue(all(r.setting == 0 for r in catalog))
        self.assertEqual(machine.available()[:3], ["A", "B", "C"])

    def test_trace(self):
        debug = Debug()
        debug.enable("machine")
        machine = legacy_machine(debug)
        machine.insert_rotors(["B", "I", "II", "III"])
        machine.set_rotors("AAA")
        with self.assertLogs("ENIGMA", level="DEBUG") as cm:
            machine.convert_message("A")
        self.assertTrue(any("[AAB] A -> A -> B" in line for line in cm.output))


if __name__ == "__main__":
    unittest.main()
