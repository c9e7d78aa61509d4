"""Audio sinks that write PCM data to standard output, a file or another program."""