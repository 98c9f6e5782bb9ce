#!/usr/bin/env python3


"""Tools to post-process the output of the FORM symbolic manipulation system."""
