"""
Game-side wiring around the locomotion core: input sampling, camera, animation sinks,
the fixed-step driver and the headless demo (`strider.game.demo`).

Kept import-free: `strider.physics` imports the collaborator protocols from here.
"""
