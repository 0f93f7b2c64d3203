# HNP Importer - command line entry points
