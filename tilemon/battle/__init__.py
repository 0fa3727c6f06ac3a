"""
Battle system package.
Modules:
- models.py (static definitions, Combatant state)
- mechanics.py (stage math, damage formula pieces)
- abilities.py (ability hooks)
- engine.py (single-move resolution pipeline, end-of-turn status)
- capture.py (shake trials)
- ai.py (opponent move choice)
- factory.py / experience.py (combatant creation, progression)
- session.py (1v1 turn loop)
"""
