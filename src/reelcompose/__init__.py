"""reelcompose — timeline composition for narrated section videos.

Resolve each section's on-screen duration from its narration length,
place sections back-to-back with crossfade overlaps between a fixed
intro and outro, and schedule the overlapping annotation layers of the
annotated still-image section. Compositions are declared in YAML
manifests.
"""
