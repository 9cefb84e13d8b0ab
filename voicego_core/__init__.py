"""
VoiceGo core Python package.

Rules engine and command parsing for 5x5 capture-Go against a scripted opponent.
Modules:
- board.py: Board, Cell, Coord and coordinate labels
- groups.py: group discovery, liberties and captures
- rules.py: move legality
- parser.py: free-text move commands
- ai.py: opponent strategies
- state.py: GameState, Move, Scores
- session.py: GameSession turn state machine
- errors.py, config.py: error types and environment settings
"""
