"""The default puzzle room: seven locks and the tools that work on them."""

from __future__ import annotations

from puzzle_room.engine.locks import LockNode
from puzzle_room.engine.tools import InventoryGrant, ToolDescriptor

TERMINAL_LOCK_ID = "vault"


def default_locks() -> list[LockNode]:
    return [
        LockNode(
            id="victorian",
            name="Victorian Lock",
            answer="3063",
            requires=[],
            description="A heavy brass padlock with three spinning wheels.",
        ),
        LockNode(
            id="chinese",
            name="Chinese Puzzle Box",
            answer="4411",
            requires=["victorian"],
            description="An intricate wooden box with sliding tiles and dragon carvings.",
        ),
        LockNode(
            id="medieval",
            name="Medieval Shield",
            answer="53",
            requires=["victorian"],
            description="A weathered heraldic shield mounted on the wall.",
        ),
        LockNode(
            id="japanese",
            name="Antique Japanese Lock",
            answer="773",
            requires=["chinese"],
            description="A rusted iron mechanism protecting a small shrine.",
        ),
        LockNode(
            id="digital",
            name="Digital Keypad",
            answer="42",
            requires=["medieval"],
            description="A modern 0-9 keypad glowing with a faint blue light.",
        ),
        # Not really a lock: it opens when the journal is read.
        LockNode(
            id="library",
            name="Manuscript Library",
            answer="OPEN",
            requires=["digital"],
            description="Rows of dusty bookshelves.",
        ),
        LockNode(
            id=TERMINAL_LOCK_ID,
            name="The Final Vault",
            answer="979",
            requires=["victorian", "chinese", "medieval", "japanese", "digital", "library"],
            description="A massive circular bank vault door.",
        ),
    ]


BELL_GRANT = InventoryGrant(item="Bell", message="[LOOT DROP] You obtained: Bell (Value: 773)")


def default_tools() -> list[ToolDescriptor]:
    return [
        # Victorian
        ToolDescriptor.query(
            "victorian_inspect_wheels",
            "View current numbers on the brass wheels",
            "Wheel 1: 233\nWheel 2: 239\nWheel 3: 251",
        ),
        ToolDescriptor.query(
            "victorian_read_plaque",
            "Read the inscription on the lock",
            '"Positions mark the golden spiral\'s path... Sum reveals eternal truth... Masked by fourth power of ten."',
        ),
        ToolDescriptor.attempt(
            "victorian_attempt_combination",
            "Input a 4-digit code. Usage: victorian_attempt_combination <code_number>",
            lock_id="victorian",
        ),
        # Chinese
        ToolDescriptor.query(
            "chinese_peer_inside",
            "Look through the gaps in the tiles",
            '"Four dragons guard the pearl. North, South, East, West."',
        ),
        ToolDescriptor.query("chinese_inspect_panels", "Examine the sliding panels", "The panels are numbered: 4, 4, 1, 1."),
        ToolDescriptor.attempt(
            "chinese_attempt_alignment",
            "Align the tiles. Usage: chinese_attempt_alignment <code_number>",
            lock_id="chinese",
        ),
        # Medieval
        ToolDescriptor.query(
            "medieval_measure_ward_angle",
            "Measure the angle of the shield's ward",
            "The angle is exactly 53 degrees.",
        ),
        ToolDescriptor.query("medieval_inspect_heraldry", "Examine the shield's coat of arms", '"The prime defender stands alone."'),
        ToolDescriptor.attempt(
            "medieval_shout_password",
            "Shout a password at the shield. Usage: medieval_shout_password <number>",
            lock_id="medieval",
        ),
        # Japanese
        ToolDescriptor.query("japanese_inspect_shrine", "Look at what the lock is protecting", "A ceremonial bell rests here."),
        ToolDescriptor.query(
            "japanese_scrutinize_mechanism",
            "Closely examine the rust patterns",
            'You find a faint etching: "773".',
        ),
        ToolDescriptor.attempt(
            "japanese_unlock_with_code",
            "Enter the code. Usage: japanese_unlock_with_code <code_number>",
            lock_id="japanese",
            grant=BELL_GRANT,
        ),
        # Digital
        ToolDescriptor.query(
            "digital_scan_fingerprint",
            "Scan for latent fingerprints",
            'Bio-residue suggests the user was thinking about "Life, the Universe, and Everything".',
        ),
        ToolDescriptor.attempt("digital_enter_pin", "Enter the PIN. Usage: digital_enter_pin <number>", lock_id="digital"),
        # Library
        ToolDescriptor.reveal(
            "library_read_journal",
            "Read the open journal on the desk",
            lock_id="library",
            text='"The final vault requires the sum of our history, minus the ringing of the bell."',
        ),
        # Vault
        ToolDescriptor.query(
            "vault_inspect_door",
            "Examine the massive vault door",
            "It requires a final calculation based on all previous challenges.",
        ),
        ToolDescriptor.attempt(
            "vault_turn_wheel",
            "Turn the vault wheel to a number. Usage: vault_turn_wheel <number>",
            lock_id=TERMINAL_LOCK_ID,
        ),
    ]
