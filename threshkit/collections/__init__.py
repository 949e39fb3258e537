"""Collections indexed by party: vec maps, hole maps, fill maps, subsets and peer-to-peer grids."""