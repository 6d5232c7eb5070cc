"""Seed data for the static meme template catalog."""

from typing import Any, Dict, List

# Slot geometry is in template pixels: x/y of the caption anchor and the wrap width.
TEMPLATE_SEED: List[Dict[str, Any]] = [
    {
        "id": "drake",
        "name": "Drake Hotline Bling",
        "image_ref": "https://i.imgflip.com/30b1gx.jpg",
        "categories": ["Reactions", "Comparisons", "Programming", "Marketing", "Life"],
        "text_slots": {
            "top": {"x": 350, "y": 100, "max_width": 300},
            "bottom": {"x": 350, "y": 300, "max_width": 300},
        },
    },
    {
        "id": "distracted-boyfriend",
        "name": "Distracted Boyfriend",
        "image_ref": "https://i.imgflip.com/1ur9b.jpg",
        "categories": ["Relationships", "Comparisons", "Programming", "Marketing"],
        "text_slots": {
            "top": {"x": 200, "y": 50, "max_width": 400},
            "bottom": {"x": 200, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "success-kid",
        "name": "Success Kid",
        "image_ref": "https://i.imgflip.com/1bhk.jpg",
        "categories": ["Success", "Programming", "Work", "Life"],
        "text_slots": {
            "top": {"x": 200, "y": 50, "max_width": 400},
            "bottom": {"x": 200, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "two-buttons",
        "name": "Two Buttons",
        "image_ref": "https://i.imgflip.com/1g8my4.jpg",
        "categories": ["Decisions", "Programming", "Work", "Life"],
        "text_slots": {
            "top": {"x": 200, "y": 100, "max_width": 300},
            "bottom": {"x": 200, "y": 250, "max_width": 300},
        },
    },
    {
        "id": "change-my-mind",
        "name": "Change My Mind",
        "image_ref": "https://i.imgflip.com/24y43o.jpg",
        "categories": ["Opinions", "Programming", "Work", "Social Media"],
        "text_slots": {
            "bottom": {"x": 250, "y": 250, "max_width": 400},
        },
    },
    {
        "id": "expanding-brain",
        "name": "Expanding Brain",
        "image_ref": "https://i.imgflip.com/1jwhww.jpg",
        "categories": ["Intelligence", "Programming", "Marketing", "Life"],
        "text_slots": {
            "top": {"x": 250, "y": 100, "max_width": 400},
            "bottom": {"x": 250, "y": 400, "max_width": 400},
        },
    },
    {
        "id": "one-does-not-simply",
        "name": "One Does Not Simply",
        "image_ref": "https://i.imgflip.com/1bij.jpg",
        "categories": ["Warnings", "Programming", "Work", "Life"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 300, "max_width": 400},
        },
    },
    {
        "id": "surprised-pikachu",
        "name": "Surprised Pikachu",
        "image_ref": "https://i.imgflip.com/2kbn1e.jpg",
        "categories": ["Surprise", "Reactions", "Programming", "Work", "Life"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
        },
    },
    {
        "id": "this-is-fine",
        "name": "This Is Fine",
        "image_ref": "https://i.imgflip.com/2cp1.jpg",
        "categories": ["Stress", "Programming", "Work", "Life"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
        },
    },
    {
        "id": "waiting-skeleton",
        "name": "Waiting Skeleton",
        "image_ref": "https://i.imgflip.com/2fm6x.jpg",
        "categories": ["Waiting", "Programming", "Work", "Life"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "guy-thinking",
        "name": "Guy Thinking",
        "image_ref": "https://i.imgflip.com/1h7in3.jpg",
        "categories": ["Thinking", "Confusion", "Programming", "Work"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "woman-yelling",
        "name": "Woman Yelling at Cat",
        "image_ref": "https://i.imgflip.com/38el31.jpg",
        "categories": ["Arguments", "Reactions", "Social Media"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "disaster-girl",
        "name": "Disaster Girl",
        "image_ref": "https://i.imgflip.com/23ls.jpg",
        "categories": ["Evil", "Chaos", "Programming", "Work"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "roll-safe",
        "name": "Roll Safe",
        "image_ref": "https://i.imgflip.com/1h7in3.jpg",
        "categories": ["Advice", "Humor", "Programming", "Life"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "shut-up-and-take-my-money",
        "name": "Shut Up And Take My Money",
        "image_ref": "https://i.imgflip.com/3si4.jpg",
        "categories": ["Excitement", "Products", "Marketing"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "so-hot-right-now",
        "name": "So Hot Right Now",
        "image_ref": "https://i.imgflip.com/cv1y0.jpg",
        "categories": ["Trends", "Programming", "Marketing"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "matrix-morpheus",
        "name": "Matrix Morpheus",
        "image_ref": "https://i.imgflip.com/25w3.jpg",
        "categories": ["Advice", "Reality", "Programming"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "y-u-no",
        "name": "Y U No",
        "image_ref": "https://i.imgflip.com/1bh3.jpg",
        "categories": ["Questions", "Frustration", "Programming"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "hide-the-pain-harold",
        "name": "Hide the Pain Harold",
        "image_ref": "https://i.imgflip.com/gk5el.jpg",
        "categories": ["Awkward", "Life", "Work", "Social Media"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "ancient-aliens",
        "name": "Ancient Aliens Guy",
        "image_ref": "https://i.imgflip.com/26am.jpg",
        "categories": ["Conspiracy", "Programming", "Work"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "doge",
        "name": "Doge",
        "image_ref": "https://i.imgflip.com/4t0m5.jpg",
        "categories": ["Animals", "Funny", "Social Media"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "first-world-problems",
        "name": "First World Problems",
        "image_ref": "https://i.imgflip.com/1bhf.jpg",
        "categories": ["Complaints", "Life", "Social Media"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "galaxy-brain",
        "name": "Galaxy Brain",
        "image_ref": "https://i.imgflip.com/24sx7.jpg",
        "categories": ["Intelligence", "Programming", "Work"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "mocking-spongebob",
        "name": "Mocking Spongebob",
        "image_ref": "https://i.imgflip.com/1otk96.jpg",
        "categories": ["Mockery", "Social Media", "Arguments"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "change-my-mind-crowder",
        "name": "Change My Mind - Crowder",
        "image_ref": "https://i.imgflip.com/24y43o.jpg",
        "categories": ["Opinions", "Debate", "Social Media"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "they-dont-know",
        "name": "They Don't Know",
        "image_ref": "https://i.imgflip.com/4pn1an.jpg",
        "categories": ["Social Anxiety", "Programming", "Work"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "bad-luck-brian",
        "name": "Bad Luck Brian",
        "image_ref": "https://i.imgflip.com/1bip.jpg",
        "categories": ["Bad Luck", "Failure", "Life"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "finding-neverland",
        "name": "Finding Neverland",
        "image_ref": "https://i.imgflip.com/3pnmg.jpg",
        "categories": ["Realization", "Emotional", "Life"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "futurama-fry",
        "name": "Futurama Fry",
        "image_ref": "https://i.imgflip.com/1bgw.jpg",
        "categories": ["Suspicion", "Doubt", "Confusion"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "x-all-the-y",
        "name": "X All The Y",
        "image_ref": "https://i.imgflip.com/1bh9.jpg",
        "categories": ["Motivation", "Exaggeration", "Programming"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "grandma-internet",
        "name": "Grandma Finds The Internet",
        "image_ref": "https://i.imgflip.com/1bhw.jpg",
        "categories": ["Technology", "Confusion", "Humor"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "third-world-skeptical",
        "name": "Third World Skeptical Kid",
        "image_ref": "https://i.imgflip.com/265k.jpg",
        "categories": ["Skepticism", "Disbelief", "Humor"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
    {
        "id": "steve-harvey",
        "name": "Steve Harvey Confused",
        "image_ref": "https://i.imgflip.com/4bh6h.jpg",
        "categories": ["Confusion", "Reactions", "Humor"],
        "text_slots": {
            "top": {"x": 250, "y": 50, "max_width": 400},
            "bottom": {"x": 250, "y": 350, "max_width": 400},
        },
    },
]
