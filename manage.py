"""
This is the main file to run the game.
It imports the run function from the invaders app and runs it.
"""

from invaders.app import run

if __name__ == "__main__":
    run()
