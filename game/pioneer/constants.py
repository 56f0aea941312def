"""
Design constants for Interstellar Pioneers
Difficulty thresholds are fixed design values, not tuning data.
"""

import math

# Playfield
GAME_WIDTH = 800
GAME_HEIGHT = 600
FPS = 60
STAR_COUNT = 100

# Player
PLAYER_RADIUS = 20.0
PLAYER_SPEED = 5.0
PLAYER_MAX_HEALTH = 3
PLAYER_COLOR = "#60a5fa"
INVINCIBILITY_TICKS = 120

# Bullets
BULLET_RADIUS = 4.0
BULLET_SPEED = 7.0
BULLET_DAMAGE = 1.0
BULLET_ANGLE = -math.pi / 2  # straight up (y grows downward)
TRIPLE_SHOT_SPREAD = 0.2
SHOT_COOLDOWN = 0.2  # seconds of host clock between volleys
PLAYER_BULLET_COLOR = "#fbbf24"
ENEMY_BULLET_COLOR = "#f87171"

# Enemies
ENEMY_CONFIG = {
    "BASIC": {"radius": 15.0, "speed": 2.0, "health": 1, "score_value": 100, "color": "#3b82f6"},
    "FAST": {"radius": 12.0, "speed": 4.0, "health": 1, "score_value": 150, "color": "#10b981"},
    "HEAVY": {"radius": 25.0, "speed": 1.0, "health": 3, "score_value": 300, "color": "#ef4444"},
}
ENEMY_SPEED_PER_LEVEL = 0.2
ENEMY_HEALTH_LEVEL_STEP = 5

# (min level, draw threshold, type), applied in order, last match wins
ENEMY_TYPE_RULES = (
    (3, 0.7, "FAST"),
    (5, 0.9, "HEAVY"),
    (8, 0.6, "FAST"),
    (10, 0.8, "HEAVY"),
)

SPAWN_BASE_TICKS = 60
SPAWN_TICKS_PER_LEVEL = 2
SPAWN_MIN_TICKS = 20
ESCAPE_PENALTY = 50

# Pickups
POWERUP_CONFIG = {
    "TRIPLE_SHOT": {"radius": 15.0, "color": "#f59e0b", "duration": 600},
    "SHIELD": {"radius": 15.0, "color": "#8b5cf6"},
}
POWERUP_SPEED = 1.5
POWERUP_DROP_CHANCE = 0.1

COIN_RADIUS = 10.0
COIN_SPEED = 1.0
COIN_VALUE = 1
COIN_COLOR = "#fbbf24"

# Effects
PARTICLE_DECAY = 0.02
PARTICLES_DIRECT_KILL = 15
PARTICLES_RING_KILL = 10
PARTICLES_ABILITY_KILL = 10
PARTICLES_PLAYER_HIT = 10

SHOCKWAVE_GROWTH = 5.0
SHOCKWAVE_FADE = 0.025
SHOCKWAVE_BAND = 20.0
SHOCKWAVE_DAMAGE = 0.2
SHOCKWAVE_MAX_RADIUS = 100.0
ABILITY_SHOCKWAVE_MAX_RADIUS = 1000.0
PROXIMITY_FUSE_RANGE = 60.0

# Ability
MAX_CHARGE = 100
CHARGE_DIRECT_KILL = 2
CHARGE_RING_KILL = 1

# Progression
LEVEL_SCORE_FACTOR = 1000
MILESTONE_SCORE = 5000
SURVIVOR_LEVEL = 5
POWER_COLLECTOR_PICKUPS = 5
ACE_PILOT_KILLS = 100

ACHIEVEMENTS = (
    {"id": "first_blood", "title": "First Blood", "description": "Destroy your first enemy ship", "icon": "Target"},
    {"id": "survivor", "title": "Survivor", "description": "Reach level 5", "icon": "Shield"},
    {"id": "power_collector", "title": "Power Collector", "description": "Pick up 5 power-ups", "icon": "Zap"},
    {"id": "sharpshooter", "title": "Sharpshooter", "description": "Score more than 5000 points", "icon": "Crosshair"},
    {"id": "ace_pilot", "title": "Ace Pilot", "description": "Destroy 100 enemy ships", "icon": "Trophy"},
)

# Shop
SHOP_PRICES = {
    "TRIPLE_SHOT": 50,
    "SHIELD": 30,
    "HEALTH": 40,
    "ULTIMATE": 100,
}

# Host persistence
COINS_STORAGE_KEY = "pioneer_coins"
