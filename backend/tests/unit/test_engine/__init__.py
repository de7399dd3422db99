"""Engine tests - flattening, completion, progress and version history"""
