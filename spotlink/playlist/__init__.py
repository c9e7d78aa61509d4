"""Playlist models: lists, items, attributes, diffs, operations, permissions and annotations."""