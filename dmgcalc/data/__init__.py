"""Game data tables: item stats, keystones, sample champion curves and spells."""
