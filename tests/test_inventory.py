import unittest

from garden_sim.economy.inventory import Inventory
from garden_sim.world.plants import ItemType, PlantCatalog

CATALOG_DATA = {
    "daisy": {"required_pot_size": "SMALL", "growth_days": 1, "drain_rate": 0.1, "item_type": "FLOWER", "max_stack_size": 10},
    "carrot": {"required_pot_size": "MEDIUM", "growth_days": 2, "drain_rate": 0.1, "item_type": "VEGETABLE"},
    "bonsai": {"required_pot_size": "LARGE", "growth_days": 9, "drain_rate": 0.1, "is_stackable": False},
}


class TestInventory(unittest.TestCase):
    def setUp(self):
        self.catalog = PlantCatalog.from_dict(CATALOG_DATA)
        self.inventory = Inventory(self.catalog, size=3)
        self.changes = []
        self.inventory.add_change_listener(lambda: self.changes.append(1))

    def test_add_and_count(self):
        self.assertTrue(self.inventory.add_item("carrot", 5))
        self.assertTrue(self.inventory.add_item("carrot", 2))
        self.assertEqual(self.inventory.count("carrot"), 7)
        self.assertEqual(len(self.inventory.items_of_type(None)), 1)
        self.assertEqual(len(self.changes), 2)

    def test_stacks_split_at_limit(self):
        self.assertTrue(self.inventory.add_item("daisy", 15))
        amounts = [s.amount for s in self.inventory.slots if not s.is_empty]
        self.assertEqual(amounts, [10, 5])

    def test_add_is_all_or_nothing(self):
        self.assertFalse(self.inventory.add_item("daisy", 31))
        self.assertEqual(self.inventory.count("daisy"), 0)
        self.assertEqual(self.changes, [])

    def test_non_stackable_uses_one_slot_each(self):
        self.assertTrue(self.inventory.add_item("bonsai", 3))
        self.assertTrue(self.inventory.is_full())
        self.assertFalse(self.inventory.can_add("bonsai"))

    def test_remove(self):
        self.inventory.add_item("daisy", 12)
        self.assertTrue(self.inventory.remove_item("daisy", 11))
        self.assertEqual(self.inventory.count("daisy"), 1)
        self.assertFalse(self.inventory.remove_item("daisy", 2))
        self.assertEqual(self.inventory.count("daisy"), 1)
        self.assertFalse(self.inventory.remove_item("carrot"))

    def test_items_of_type(self):
        self.inventory.add_item("daisy", 1)
        self.inventory.add_item("carrot", 1)
        flowers = self.inventory.items_of_type(ItemType.FLOWER)
        self.assertEqual([s.item_name for s in flowers], ["daisy"])
        self.assertEqual(self.inventory.items_of_type(ItemType.FRUIT), [])

    def test_round_trip(self):
        self.inventory.add_item("daisy", 12)
        self.inventory.add_item("carrot", 4)
        other = Inventory(self.catalog, size=3)
        other.load_dict(self.inventory.to_dict())
        self.assertEqual(other.totals(), {"daisy": 12, "carrot": 4})

    def test_load_drops_unknown_items(self):
        other = Inventory(self.catalog, size=3)
        other.load_dict({"slots": [{"item": "ghost", "amount": 2}, {"item": "carrot", "amount": 1}, None]})
        self.assertEqual(other.totals(), {"carrot": 1})

    def test_load_skips_malformed_slots(self):
        self.inventory.add_item("daisy", 2)
        self.inventory.load_dict([1, 2])
        self.assertEqual(self.inventory.totals(), {})

        self.inventory.load_dict({"slots": ["daisy", {"item": ["carrot"], "amount": 1}, {"item": "carrot", "amount": "lots"}]})
        self.assertEqual(self.inventory.totals(), {})

        self.inventory.load_dict({"slots": [7, {"item": "carrot", "amount": 2}]})
        self.assertEqual(self.inventory.totals(), {"carrot": 2})


if __name__ == "__main__":
    unittest.main()
