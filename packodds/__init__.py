"""PackOdds: booster pack odds for card wishlists."""
