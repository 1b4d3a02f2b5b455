# Labeled corpus for the sustainability classifier.
# Versioned input of the offline training step: any edit must bump CORPUS_VERSION
# and be followed by `python -m ecocart.ml.train`.
# Class sizes keep `medium` the most frequent, so empty text falls back to it.

CORPUS_VERSION = "2024.2"

TRAINING_DATA = [
    # HIGH
    ("organic cotton shirt biodegradable packaging fair trade ethically sourced", "high"),
    ("made from recycled plastic bottles eco friendly reusable materials", "high"),
    ("reusable metal water bottle plastic free packaging sustainable product", "high"),
    ("bamboo toothbrush compostable packaging zero waste carbon neutral shipping", "high"),
    ("refillable glass jar locally sourced renewable materials repairable design", "high"),

    # MEDIUM
    ("standard cotton shirt regular packaging shipped by ground transport", "medium"),
    ("polyester shirt durable product normal supply chain", "medium"),
    ("conventional cotton towel cardboard box standard delivery", "medium"),
    ("stainless steel pan long lasting regular packaging ground shipping", "medium"),
    ("wooden chair mixed materials standard shipping", "medium"),
    ("everyday backpack nylon fabric durable stitching cardboard packaging", "medium"),

    # LOW
    ("single use plastic bottle disposable packaging", "low"),
    ("fast fashion synthetic materials shipped by air", "low"),
    ("cheap plastic toy non recyclable harmful materials", "low"),
    ("disposable plastic cutlery shipped by air freight", "low"),
    ("synthetic polyester jacket toxic dyes plastic wrap landfill waste", "low"),
]
